"""Base solver interface and common utilities."""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List
import time
import tracemalloc

from ..core.board import Move, count_units
from ..core.validator import verify_solution


class SearchTimeout(Exception):
    """Raised inside a search once its time budget is spent."""


@dataclass
class SolverStats:
    """Statistics from a solver run."""
    # Outcome
    solved: bool = False
    unsolvable: bool = False
    timed_out: bool = False
    solution_length: int = 0

    # Core metrics
    time_seconds: float = 0.0
    memory_bytes: int = 0

    # Search metrics
    nodes_explored: int = 0
    backtracks: int = 0
    max_depth: int = 0

    # Additional metadata
    algorithm: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "solved": self.solved,
            "unsolvable": self.unsolvable,
            "timed_out": self.timed_out,
            "solution_length": self.solution_length,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "nodes_explored": self.nodes_explored,
            "backtracks": self.backtracks,
            "max_depth": self.max_depth,
            "algorithm": self.algorithm,
            **self.extra
        }


class BaseSolver(ABC):
    """Abstract base class for Fling solvers."""

    name: str = "BaseSolver"

    def __init__(self, track_memory: bool = True):
        """
        Args:
            track_memory: Record peak memory with tracemalloc during solve().
                          Tracing slows the search down noticeably.
        """
        self.track_memory = track_memory
        self.stats = SolverStats(algorithm=self.name)
        self._deadline: Optional[float] = None

    def solve(
        self, board: int, timeout_seconds: Optional[float] = None
    ) -> tuple[Optional[List[Move]], SolverStats]:
        """
        Solve a Fling puzzle with timing and memory tracking.

        Args:
            board: The puzzle to solve.
            timeout_seconds: Time budget for the search. The search checks
                             the clock as it goes and gives up with
                             stats.timed_out set once the budget is spent.

        Returns:
            Tuple of (moves or None, stats). None means the search proved
            the board unsolvable (stats.unsolvable), ran out of time
            (stats.timed_out), or failed with an error recorded in
            stats.extra["error"].
        """
        self.stats = SolverStats(algorithm=self.name)
        self.stats.extra["units"] = count_units(board)

        if self.track_memory:
            tracemalloc.start()

        start_time = time.perf_counter()
        if timeout_seconds is not None:
            self._deadline = start_time + timeout_seconds

        try:
            solution = self._solve(board)
            self.stats.unsolvable = solution is None
            self.stats.solved = verify_solution(board, solution)
            if solution is not None:
                self.stats.solution_length = len(solution)
        except SearchTimeout:
            self.stats.timed_out = True
            self.stats.extra["error"] = "Timeout"
            solution = None
        except Exception as e:
            self.stats.extra["error"] = str(e)
            solution = None
        finally:
            self._deadline = None

        self.stats.time_seconds = time.perf_counter() - start_time

        if self.track_memory:
            current, peak = tracemalloc.get_traced_memory()
            tracemalloc.stop()
            self.stats.memory_bytes = peak

        return solution, self.stats

    def find_solution(self, board: int) -> Optional[List[Move]]:
        """Run the bare search with fresh stats. Errors propagate."""
        self.stats = SolverStats(algorithm=self.name)
        return self._solve(board)

    @abstractmethod
    def _solve(self, board: int) -> Optional[List[Move]]:
        """
        Internal solve method to be implemented by subclasses.

        Args:
            board: The puzzle to solve.

        Returns:
            Moves in play order ([] if already solved), or None if no
            sequence of moves leaves a single unit.
        """
        pass

    def _check_deadline(self) -> None:
        """
        Raise SearchTimeout if the budget given to solve() is spent.

        Subclasses call this once per node after counting it. The clock is
        read on the first node and then every 256 nodes.
        """
        if self._deadline is None or self.stats.nodes_explored & 0xFF != 1:
            return
        if time.perf_counter() >= self._deadline:
            raise SearchTimeout(
                f"gave up after {self.stats.nodes_explored:,} nodes"
            )

    def reset_stats(self) -> None:
        """Reset solver statistics."""
        self.stats = SolverStats(algorithm=self.name)
