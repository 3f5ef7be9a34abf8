"""Command-line interface for the Fling solver system."""

import argparse
import sys
import json

from .core.board import from_string, to_string, format_board, count_units
from .core.moves import legal_moves, replay
from .generator import PuzzleGenerator, Difficulty
from .solvers import SOLVERS, make_solver
from .benchmark import Benchmark
from .benchmark.visualizer import Visualizer


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Fling puzzle solver: clear a 7x8 board down to one unit",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Boards are 56 characters, row-major, 7 per row: 0 or . for empty,
1, o, x or # for a unit. Spaces, / and | between rows are ignored.

Examples:
  # Solve a puzzle and show every intermediate board
  python -m fling.cli solve --steps --puzzle "......./......./......./o..o.../......./......./......./......."

  # List the legal moves of a board
  python -m fling.cli moves --puzzle "..."

  # Generate 5 hard puzzles
  python -m fling.cli generate --count 5 --difficulty hard

  # Run full benchmark
  python -m fling.cli benchmark --puzzles 10 --output results/
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Solve command
    solve_parser = subparsers.add_parser("solve", help="Solve a Fling puzzle")
    solve_parser.add_argument(
        "--algorithm", "-a",
        choices=sorted(SOLVERS) + ["all"],
        default="dfs",
        help="Solving algorithm to use (default: dfs)"
    )
    solve_parser.add_argument(
        "--puzzle", "-p", type=str, required=True,
        help="Board string (56 cells)"
    )
    solve_parser.add_argument(
        "--steps", action="store_true",
        help="Replay the solution and print every intermediate board"
    )
    solve_parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Show detailed solving statistics"
    )
    solve_parser.add_argument(
        "--timeout", "-t", type=float, default=None,
        help="Give up after this many seconds (default: no limit)"
    )

    # Moves command
    moves_parser = subparsers.add_parser("moves", help="List the legal moves of a board")
    moves_parser.add_argument(
        "--puzzle", "-p", type=str, required=True,
        help="Board string (56 cells)"
    )

    # Generate command
    gen_parser = subparsers.add_parser("generate", help="Generate solvable Fling puzzles")
    gen_parser.add_argument(
        "--count", "-n", type=int, default=5,
        help="Number of puzzles to generate (default: 5)"
    )
    gen_parser.add_argument(
        "--difficulty", "-d",
        choices=[d.value for d in Difficulty] + ["all"],
        default="medium",
        help="Difficulty level (default: medium)"
    )
    gen_parser.add_argument(
        "--output", "-o", type=str, default=None,
        help="Output file for puzzles (JSON format)"
    )
    gen_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducibility"
    )

    # Benchmark command
    bench_parser = subparsers.add_parser("benchmark", help="Run solver benchmarks")
    bench_parser.add_argument(
        "--puzzles", "-n", type=int, default=10,
        help="Puzzles per difficulty (default: 10)"
    )
    bench_parser.add_argument(
        "--difficulty", "-d",
        choices=[d.value for d in Difficulty] + ["all"],
        default="all",
        help="Difficulty to benchmark (default: all)"
    )
    bench_parser.add_argument(
        "--output", "-o", type=str, default="results",
        help="Output directory for results (default: results)"
    )
    bench_parser.add_argument(
        "--seed", "-s", type=int, default=42,
        help="Random seed for reproducibility (default: 42)"
    )
    bench_parser.add_argument(
        "--timeout", "-t", type=float, default=60.0,
        help="Seconds allowed per puzzle per solver (default: 60)"
    )
    bench_parser.add_argument(
        "--algorithms", "-a", nargs="+", choices=sorted(SOLVERS),
        default=None,
        help="Solvers to compare (default: dfs dfs-memo stack)"
    )
    bench_parser.add_argument(
        "--include-unsolvable", action="store_true",
        help="Draw boards without the solvability filter"
    )
    bench_parser.add_argument(
        "--no-charts", action="store_true",
        help="Skip chart generation"
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "solve":
        cmd_solve(args)
    elif args.command == "moves":
        cmd_moves(args)
    elif args.command == "generate":
        cmd_generate(args)
    elif args.command == "benchmark":
        cmd_benchmark(args)


def _parse_puzzle(text: str) -> int:
    try:
        return from_string(text)
    except ValueError as e:
        print(f"Error parsing puzzle: {e}")
        sys.exit(1)


def cmd_solve(args):
    """Handle the solve command."""
    board = _parse_puzzle(args.puzzle)

    print(f"Input puzzle ({count_units(board)} units):")
    print(format_board(board))
    print()

    if args.algorithm == "all":
        algorithms = sorted(SOLVERS)
    else:
        algorithms = [args.algorithm]

    for algorithm in algorithms:
        solver = make_solver(algorithm)
        print(f"Solving with {solver.name}...")
        solution, stats = solver.solve(board, timeout_seconds=args.timeout)

        if stats.timed_out:
            print(f"✗ Gave up after {stats.time_seconds:.2f}s")
        elif "error" in stats.extra:
            print(f"✗ Solver failed: {stats.extra['error']}")
        elif stats.solved:
            print(f"✓ Solved in {stats.time_seconds:.4f}s with {len(solution)} moves")
            for i, move in enumerate(solution, 1):
                print(f"  {i:>2}. {move}")
        elif board == 0:
            print("Board has no units; nothing to solve.")
        else:
            print("Unsolvable.")

        if args.verbose:
            print(f"  Time: {stats.time_seconds:.4f}s")
            print(f"  Nodes explored: {stats.nodes_explored:,}")
            print(f"  Backtracks: {stats.backtracks:,}")
            print(f"  Max depth: {stats.max_depth}")
            print(f"  Memory: {stats.memory_bytes / 1024:.2f} KB")
            if "memo_hits" in stats.extra:
                print(f"  Memo hits: {stats.extra['memo_hits']:,}")

        if args.steps and solution:
            boards = replay(board, solution)
            for i, move in enumerate(solution):
                print(f"\nMove {i + 1}: {move}")
                print(format_board(boards[i], highlight=move))
            print("\nFinal board:")
            print(format_board(boards[-1]))
        print()


def cmd_moves(args):
    """Handle the moves command."""
    board = _parse_puzzle(args.puzzle)

    print(format_board(board))
    moves = list(legal_moves(board))
    print(f"\n{len(moves)} legal moves:")
    for move in moves:
        print(f"  {move}")


def cmd_generate(args):
    """Handle the generate command."""
    generator = PuzzleGenerator(seed=args.seed)

    if args.difficulty == "all":
        difficulties = list(Difficulty)
    else:
        difficulties = [Difficulty(args.difficulty)]

    all_puzzles = []

    for difficulty in difficulties:
        print(f"\nGenerating {args.count} {difficulty.value} puzzles...")

        for i in range(1, args.count + 1):
            puzzle, solution = generator.generate_with_solution(difficulty)
            all_puzzles.append({
                "difficulty": difficulty.value,
                "index": i,
                "puzzle": to_string(puzzle),
                "units": count_units(puzzle),
                "solution": [str(m) for m in solution],
            })

            print(f"\n--- {difficulty.value.capitalize()} Puzzle {i} ({count_units(puzzle)} units) ---")
            print(to_string(puzzle))
            print(format_board(puzzle))

    if args.output:
        with open(args.output, "w") as f:
            json.dump(all_puzzles, f, indent=2)
        print(f"\nAll puzzles saved to {args.output}")

    print(f"\nTotal puzzles generated: {len(all_puzzles)}")


def cmd_benchmark(args):
    """Handle the benchmark command."""
    if args.difficulty == "all":
        difficulties = list(Difficulty)
    else:
        difficulties = [Difficulty(args.difficulty)]

    print("=" * 60)
    print("FLING SOLVER BENCHMARK")
    print("=" * 60)
    print(f"Puzzles per difficulty: {args.puzzles}")
    print(f"Difficulties: {[d.value for d in difficulties]}")

    solvers = None
    if args.algorithms:
        solvers = {name: SOLVERS[name] for name in args.algorithms}

    benchmark = Benchmark(
        puzzles_per_difficulty=args.puzzles,
        difficulties=difficulties,
        solvers=solvers,
        timeout_seconds=args.timeout,
        seed=args.seed,
        include_unsolvable=args.include_unsolvable
    )

    print(f"Algorithms: {', '.join(benchmark.solvers.keys())}")
    print(f"Boards: {'any' if args.include_unsolvable else 'solvable only'}")
    print(f"Output directory: {args.output}")
    print("=" * 60)

    results = benchmark.run()

    summary = benchmark.get_summary()

    print("\n" + "=" * 60)
    print("RESULTS SUMMARY")
    print("=" * 60)

    print("\nBy Algorithm:")
    print("-" * 50)
    for algo, stats in summary["by_algorithm"].items():
        print(f"\n{algo}:")
        print(f"  Solved: {stats['solved']}/{stats['runs']}, "
              f"unsolvable: {stats['unsolvable']}, timed out: {stats['timed_out']}")
        print(f"  Avg Time: {stats['avg_time_seconds']:.4f}s")
        print(f"  Avg Nodes: {stats['avg_nodes_explored']:,.0f}")
        if stats["memo_hits"]:
            print(f"  Memo hits: {stats['memo_hits']:,}")

    print("\nBy Unit Count (avg nodes):")
    print("-" * 50)
    for units, row in summary["by_units"].items():
        cells = ", ".join(f"{algo} {s['avg_nodes_explored']:,.0f}" for algo, s in row.items())
        print(f"  {units:>2} units: {cells}")

    for memo, saving in summary["memo_savings"].items():
        print(f"\n{memo} vs {saving['baseline']}: "
              f"{saving['node_ratio']:.1%} of the nodes on {saving['puzzles']} boards")

    benchmark.save_results(args.output)

    if not args.no_charts:
        print("\nGenerating charts...")
        visualizer = Visualizer(results, args.output)
        charts = visualizer.generate_all()
        visualizer.generate_summary_table(summary)
        print(f"Charts saved to {args.output}/")
        for chart in charts:
            print(f"  - {chart.split('/')[-1]}")

    print("\n" + "=" * 60)
    print("Benchmark complete!")


if __name__ == "__main__":
    main()
