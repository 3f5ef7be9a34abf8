"""Benchmarking framework for comparing Fling solvers."""

from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Callable, List, Dict, Any, Optional, Tuple
import json
import os

import numpy as np
from tqdm import tqdm

from ..core.board import count_units, to_string
from ..generator import PuzzleGenerator, Difficulty
from ..solvers import BaseSolver, SOLVERS

SolverFactory = Callable[[], BaseSolver]

DEFAULT_ALGORITHMS = ["dfs", "dfs-memo", "stack"]

# plain search -> its memoized variant
MEMO_PAIRS = {"dfs": "dfs-memo", "stack": "stack-memo"}


@dataclass
class BenchmarkResult:
    """One solver run on one puzzle."""
    puzzle_id: int
    difficulty: str
    algorithm: str
    units: int
    solved: bool
    unsolvable: bool
    timed_out: bool
    time_seconds: float
    memory_bytes: int
    nodes_explored: int
    backtracks: int
    max_depth: int = 0
    memo_hits: int = 0
    solution_length: int = 0
    error: Optional[str] = None

    @property
    def conclusive(self) -> bool:
        """The search either found a solution or exhausted the tree."""
        return self.solved or self.unsolvable

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["memory_mb"] = self.memory_bytes / (1024 * 1024)
        return data


class Benchmark:
    """
    Runs Fling solvers over generated boards and collects search metrics.

    Every run builds its solver from a factory, so no search state carries
    over between puzzles. Runs are bounded by the solver's own time budget
    and return as soon as it is spent.
    """

    def __init__(
        self,
        puzzles_per_difficulty: int = 10,
        difficulties: Optional[List[Difficulty]] = None,
        solvers: Optional[Dict[str, SolverFactory]] = None,
        timeout_seconds: Optional[float] = 60.0,
        seed: Optional[int] = None,
        include_unsolvable: bool = False
    ):
        """
        Initialize the benchmark.

        Args:
            puzzles_per_difficulty: Number of boards to draw per difficulty.
            difficulties: Difficulties to test (default: all).
            solvers: Dict of name -> zero-argument solver factory
                     (default: the DEFAULT_ALGORITHMS entries of SOLVERS).
            timeout_seconds: Search budget per puzzle per solver, None for
                             no limit.
            seed: Random seed for reproducibility.
            include_unsolvable: Draw boards without the solvability filter,
                                so exhaustive failures are measured too.
        """
        self.puzzles_per_difficulty = puzzles_per_difficulty
        self.difficulties = difficulties or list(Difficulty)
        self.timeout_seconds = timeout_seconds
        self.seed = seed
        self.include_unsolvable = include_unsolvable

        if solvers is None:
            solvers = {name: SOLVERS[name] for name in DEFAULT_ALGORITHMS}
        self.solvers: Dict[str, SolverFactory] = solvers

        self.puzzles: Dict[str, List[int]] = {}
        self.results: List[BenchmarkResult] = []

    def generate_puzzles(self) -> None:
        """Draw the boards for every difficulty."""
        generator = PuzzleGenerator(seed=self.seed)
        solvable = not self.include_unsolvable

        print("Generating puzzles...")
        for difficulty in tqdm(self.difficulties, desc="Difficulties"):
            self.puzzles[difficulty.value] = [
                generator.generate(difficulty, solvable=solvable)
                for _ in range(self.puzzles_per_difficulty)
            ]

    def run(self, show_progress: bool = True) -> List[BenchmarkResult]:
        """
        Run every solver on every puzzle.

        Returns:
            List of BenchmarkResult objects.
        """
        if not self.puzzles:
            self.generate_puzzles()

        self.results = []
        total_runs = sum(len(p) for p in self.puzzles.values()) * len(self.solvers)

        with tqdm(total=total_runs, desc="Benchmarking", disable=not show_progress) as pbar:
            for difficulty_name, puzzles in self.puzzles.items():
                for puzzle_id, puzzle in enumerate(puzzles):
                    for solver_name, factory in self.solvers.items():
                        self.results.append(self._run_single(
                            puzzle, puzzle_id, difficulty_name, solver_name, factory
                        ))
                        pbar.update(1)

        return self.results

    def _run_single(
        self,
        puzzle: int,
        puzzle_id: int,
        difficulty: str,
        solver_name: str,
        factory: SolverFactory
    ) -> BenchmarkResult:
        """Run a freshly built solver on a single puzzle."""
        solver = factory()
        _, stats = solver.solve(puzzle, timeout_seconds=self.timeout_seconds)

        return BenchmarkResult(
            puzzle_id=puzzle_id,
            difficulty=difficulty,
            algorithm=solver_name,
            units=count_units(puzzle),
            solved=stats.solved,
            unsolvable=stats.unsolvable,
            timed_out=stats.timed_out,
            time_seconds=stats.time_seconds,
            memory_bytes=stats.memory_bytes,
            nodes_explored=stats.nodes_explored,
            backtracks=stats.backtracks,
            max_depth=stats.max_depth,
            memo_hits=stats.extra.get("memo_hits", 0),
            solution_length=stats.solution_length,
            error=stats.extra.get("error"),
        )

    def get_summary(self) -> Dict[str, Any]:
        """
        Summarise the results.

        Keys:
            by_algorithm: outcome counts, unsolvable rate among conclusive
                runs, and mean time, nodes, backtracks and solution length.
            by_units: mean nodes and time per algorithm for each unit count.
            memo_savings: for each plain/memoized pair that was run, the
                total nodes of both on the puzzles both settled, and the
                memo hits that produced the difference.
        """
        summary: Dict[str, Any] = {
            "total_puzzles": sum(len(p) for p in self.puzzles.values()),
            "algorithms": list(self.solvers),
            "difficulties": [d.value for d in self.difficulties],
            "by_algorithm": {},
            "by_units": {},
            "memo_savings": {},
        }

        for name in self.solvers:
            runs = [r for r in self.results if r.algorithm == name]
            if runs:
                summary["by_algorithm"][name] = _outcome_stats(runs)

        for units in sorted({r.units for r in self.results}):
            row = {}
            for name in self.solvers:
                runs = [r for r in self.results if r.algorithm == name and r.units == units]
                if runs:
                    row[name] = {
                        "runs": len(runs),
                        "unsolvable": sum(r.unsolvable for r in runs),
                        "avg_nodes_explored": float(np.mean([r.nodes_explored for r in runs])),
                        "avg_time_seconds": float(np.mean([r.time_seconds for r in runs])),
                    }
            summary["by_units"][units] = row

        for plain, memo in MEMO_PAIRS.items():
            if plain in self.solvers and memo in self.solvers:
                summary["memo_savings"][memo] = self._memo_savings(plain, memo)

        return summary

    def _memo_savings(self, plain: str, memo: str) -> Dict[str, Any]:
        pairs = paired_runs(self.results, plain, memo)
        plain_nodes = sum(a.nodes_explored for a, _ in pairs)
        memo_nodes = sum(b.nodes_explored for _, b in pairs)
        return {
            "baseline": plain,
            "puzzles": len(pairs),
            "plain_nodes": plain_nodes,
            "memo_nodes": memo_nodes,
            "node_ratio": memo_nodes / plain_nodes if plain_nodes else 1.0,
            "memo_hits": sum(b.memo_hits for _, b in pairs),
        }

    def save_results(self, output_dir: str) -> None:
        """Save results, summary and the boards that were tested."""
        os.makedirs(output_dir, exist_ok=True)

        with open(os.path.join(output_dir, "benchmark_results.json"), "w") as f:
            json.dump([r.to_dict() for r in self.results], f, indent=2)

        with open(os.path.join(output_dir, "benchmark_summary.json"), "w") as f:
            json.dump(self.get_summary(), f, indent=2)

        puzzles_dir = os.path.join(output_dir, "puzzles")
        for difficulty, puzzles in self.puzzles.items():
            PuzzleGenerator.save_to_folder(
                puzzles, os.path.join(puzzles_dir, difficulty),
                prefix=f"puzzle_{difficulty}"
            )

        with open(os.path.join(output_dir, "puzzles.json"), "w") as f:
            json.dump(
                {
                    d: [{"puzzle": to_string(p), "units": count_units(p)} for p in puzzles]
                    for d, puzzles in self.puzzles.items()
                },
                f, indent=2
            )

        print(f"Results and puzzles saved to {output_dir}")


def _outcome_stats(runs: List[BenchmarkResult]) -> Dict[str, Any]:
    conclusive = [r for r in runs if r.conclusive]
    unsolvable = sum(r.unsolvable for r in runs)
    lengths = [r.solution_length for r in runs if r.solved]
    return {
        "runs": len(runs),
        "solved": sum(r.solved for r in runs),
        "unsolvable": unsolvable,
        "timed_out": sum(r.timed_out for r in runs),
        "errors": sum(r.error is not None and not r.timed_out for r in runs),
        "unsolvable_rate": unsolvable / len(conclusive) if conclusive else 0.0,
        "avg_time_seconds": float(np.mean([r.time_seconds for r in runs])),
        "avg_nodes_explored": float(np.mean([r.nodes_explored for r in runs])),
        "avg_backtracks": float(np.mean([r.backtracks for r in runs])),
        "avg_solution_length": float(np.mean(lengths)) if lengths else 0.0,
        "memo_hits": sum(r.memo_hits for r in runs),
    }


def paired_runs(
    results: List[BenchmarkResult], first: str, second: str
) -> List[Tuple[BenchmarkResult, BenchmarkResult]]:
    """(first, second) result pairs for the puzzles both algorithms settled."""
    index = {
        (r.difficulty, r.puzzle_id): r
        for r in results if r.algorithm == second and r.conclusive
    }
    return [
        (r, index[(r.difficulty, r.puzzle_id)])
        for r in results
        if r.algorithm == first and r.conclusive
        and (r.difficulty, r.puzzle_id) in index
    ]
