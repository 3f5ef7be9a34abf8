"""Unit tests for Fling solvers."""

import pytest
from fling import solve
from fling.core.board import Direction, Location, Move, from_cells, count_units
from fling.core.moves import apply_moves
from fling.core.validator import is_solved, verify_solution
from fling.generator import PuzzleGenerator
from fling.solvers import BaseSolver, DFSSolver, StackSolver, make_solver


# Four units in the top row, two empty cells apart
ROW_PUZZLE = from_cells([(0, 0), (2, 0), (4, 0), (6, 0)])

ROW_SOLUTION = [
    Move(Location(0, 0), Direction.RIGHT),
    Move(Location(1, 0), Direction.RIGHT),
    Move(Location(2, 0), Direction.RIGHT),
]

# L-shape: every first move leaves two units on different lines
L_PUZZLE = from_cells([(0, 3), (3, 3), (3, 6)])


def random_boards(seed, count, units):
    generator = PuzzleGenerator(seed=seed)
    return [generator.random_board(units) for _ in range(count)]


class TestSolve:
    """Tests for the solve entry point."""

    def test_single_unit_is_already_solved(self):
        """Every one-unit board needs zero moves."""
        for index in range(56):
            assert solve(1 << index) == []

    def test_two_units_in_row(self):
        """Two units with a gap are solved by one move."""
        board = from_cells([(0, 3), (3, 3)])
        solution = solve(board)
        assert solution == [Move(Location(0, 3), Direction.RIGHT)]
        assert count_units(apply_moves(board, solution)) == 1

    def test_solve_row_puzzle(self):
        """The first solution in generator order is returned."""
        assert solve(ROW_PUZZLE) == ROW_SOLUTION

    def test_unsolvable_is_none(self):
        """Proven unsolvable boards give None, not an empty list."""
        assert solve(L_PUZZLE) is None
        assert solve(from_cells([(0, 0), (1, 1)])) is None
        assert solve(from_cells([(2, 2), (3, 2)])) is None

    def test_empty_board_is_not_a_real_solution(self):
        """The zero board is outside the solver's contract; no verified solution exists."""
        assert not verify_solution(0, solve(0))

    def test_deterministic(self):
        """Solving twice gives the same moves in the same order."""
        for board in random_boards(seed=3, count=15, units=5):
            assert solve(board) == solve(board)

    def test_solutions_end_with_one_unit(self):
        """Every returned solution replays to a single-unit board."""
        for board in random_boards(seed=11, count=40, units=4):
            solution = solve(board)
            if solution is None:
                continue
            final = apply_moves(board, solution)
            assert is_solved(final)
            assert count_units(final) == 1
            assert len(solution) == count_units(board) - 1
            assert verify_solution(board, solution)


class TestDFSSolver:
    """Tests for the recursive DFS solver."""

    def test_solve_puzzle(self):
        """Test solving a known puzzle."""
        solver = DFSSolver()
        solution, stats = solver.solve(ROW_PUZZLE)

        assert stats.solved
        assert not stats.unsolvable
        assert solution == ROW_SOLUTION
        assert stats.solution_length == 3
        assert stats.max_depth == 3
        assert stats.extra["units"] == 4

    def test_stats_collected(self):
        """Test that stats are collected."""
        solver = DFSSolver()
        solution, stats = solver.solve(L_PUZZLE)

        assert solution is None
        assert stats.unsolvable
        assert not stats.solved
        # Root plus its four children, all dead ends
        assert stats.nodes_explored == 5
        assert stats.backtracks == 5
        assert stats.time_seconds > 0

    def test_memo_gives_same_solution(self):
        """Pruning dead boards never changes the solution found."""
        plain = DFSSolver(track_memory=False)
        memo = DFSSolver(memoize=True, track_memory=False)
        for board in random_boards(seed=5, count=20, units=6):
            plain_solution = plain.find_solution(board)
            plain_nodes = plain.stats.nodes_explored
            assert memo.find_solution(board) == plain_solution
            assert memo.stats.nodes_explored <= plain_nodes

    def test_memo_name(self):
        """Memoizing solvers report a distinct algorithm name."""
        assert DFSSolver(memoize=True).solve(ROW_PUZZLE)[1].algorithm == "DFS+Memo"


class TestStackSolver:
    """Tests for the explicit-stack solver."""

    def test_solve_puzzle(self):
        """Test solving a known puzzle."""
        solution, stats = StackSolver().solve(ROW_PUZZLE)
        assert stats.solved
        assert solution == ROW_SOLUTION
        assert stats.max_depth == 3

    def test_already_solved(self):
        """One unit needs no moves."""
        assert StackSolver().find_solution(from_cells([(4, 4)])) == []

    def test_unsolvable(self):
        """Exhausting the stack reports None."""
        solution, stats = StackSolver().solve(L_PUZZLE)
        assert solution is None
        assert stats.unsolvable

    @pytest.mark.parametrize("memoize", [False, True])
    def test_matches_recursive_solver(self, memoize):
        """Both search drivers visit moves in the same order."""
        stack = StackSolver(memoize=memoize, track_memory=False)
        for units in (3, 5, 7):
            for board in random_boards(seed=units, count=15, units=units):
                assert stack.find_solution(board) == solve(board)


class TestBaseSolver:
    """Tests for the shared solver framework."""

    def test_errors_recorded_in_stats(self):
        """Unexpected failures are reported through the stats."""

        class BrokenSolver(BaseSolver):
            name = "Broken"

            def _solve(self, board):
                raise RuntimeError("boom")

        solution, stats = BrokenSolver().solve(ROW_PUZZLE)
        assert solution is None
        assert not stats.solved
        assert stats.extra["error"] == "boom"

    def test_make_solver(self):
        """Solvers are created by registry name."""
        assert isinstance(make_solver("dfs"), DFSSolver)
        assert make_solver("dfs-memo").memoize
        assert isinstance(make_solver("stack"), StackSolver)
        stack_memo = make_solver("stack-memo")
        assert isinstance(stack_memo, StackSolver) and stack_memo.memoize
        with pytest.raises(ValueError):
            make_solver("bfs")

    @pytest.mark.parametrize("solver_class", [DFSSolver, StackSolver])
    def test_timeout(self, solver_class):
        """A spent time budget stops the search and is reported as such."""
        solver = solver_class(track_memory=False)
        solution, stats = solver.solve(ROW_PUZZLE, timeout_seconds=0.0)

        assert solution is None
        assert stats.timed_out
        assert not stats.solved
        assert not stats.unsolvable
        assert stats.extra["error"] == "Timeout"

        # The budget applies to one call only
        solution, stats = solver.solve(ROW_PUZZLE)
        assert solution == ROW_SOLUTION
        assert not stats.timed_out

    def test_generous_timeout_changes_nothing(self):
        """A budget that is not spent leaves the result untouched."""
        solution, stats = DFSSolver(track_memory=False).solve(L_PUZZLE, timeout_seconds=30.0)
        assert solution is None
        assert stats.unsolvable
        assert stats.nodes_explored == 5

    def test_stats_to_dict(self):
        """Stats flatten their extras into the dictionary."""
        _, stats = DFSSolver(track_memory=False).solve(ROW_PUZZLE)
        data = stats.to_dict()
        assert data["solved"] is True
        assert data["units"] == 4
        assert data["algorithm"] == "DFS+Backtracking"
        assert data["memory_bytes"] == 0
        assert data["timed_out"] is False


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
