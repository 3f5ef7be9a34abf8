"""Charts for Fling benchmark results."""

from __future__ import annotations
import os
from typing import Dict, List, Optional

import matplotlib.pyplot as plt
from matplotlib.ticker import MaxNLocator
import seaborn as sns
import numpy as np

from .benchmark import BenchmarkResult, MEMO_PAIRS, paired_runs


DIFFICULTY_ORDER = ["easy", "medium", "hard", "expert"]


class Visualizer:
    """
    Draws how search effort grows with the number of units on the board,
    what the dead-board memo saves, and how often drawn boards turn out to
    be unsolvable.
    """

    def __init__(self, results: List[BenchmarkResult], output_dir: str = "results"):
        self.results = results
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

        plt.style.use('seaborn-v0_8-whitegrid')
        self.colors = dict(zip(
            self._algorithms(),
            sns.color_palette("husl", max(len(self._algorithms()), 1))
        ))

    def _algorithms(self) -> List[str]:
        seen: Dict[str, None] = {}
        for r in self.results:
            seen.setdefault(r.algorithm)
        return list(seen)

    def _save(self, name: str) -> str:
        plt.tight_layout()
        path = os.path.join(self.output_dir, name)
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()
        return path

    def generate_all(self) -> List[str]:
        """
        Generate every chart the results support.

        The memo chart is skipped when no plain/memoized pair was run.
        """
        charts = [self.plot_nodes_by_units(), self.plot_outcomes()]
        memo_chart = self.plot_memo_savings()
        if memo_chart is not None:
            charts.append(memo_chart)
        return charts

    def plot_nodes_by_units(self) -> str:
        """Mean nodes explored against unit count, one line per algorithm."""
        fig, ax = plt.subplots(figsize=(10, 6))

        for algo in self._algorithms():
            runs = [r for r in self.results if r.algorithm == algo and r.conclusive]
            units = sorted({r.units for r in runs})
            if not units:
                continue
            means = [np.mean([r.nodes_explored for r in runs if r.units == u]) for u in units]
            ax.plot(units, means, marker='o', label=algo, color=self.colors[algo])

        ax.set_yscale('log')
        ax.set_xlabel('Units on board', fontsize=12)
        ax.set_ylabel('Nodes explored (mean, log scale)', fontsize=12)
        ax.set_title('Search Effort by Unit Count', fontsize=14, fontweight='bold')
        ax.xaxis.set_major_locator(MaxNLocator(integer=True))
        ax.legend()

        return self._save('nodes_by_units.png')

    def plot_outcomes(self) -> str:
        """Stacked share of solvable, unsolvable and timed-out boards per difficulty."""
        fig, ax = plt.subplots(figsize=(10, 6))

        present = {r.difficulty for r in self.results}
        difficulties = [d for d in DIFFICULTY_ORDER if d in present] + sorted(present - set(DIFFICULTY_ORDER))

        # A board's outcome is known once any algorithm settled it.
        outcomes = {}
        for r in self.results:
            key = (r.difficulty, r.puzzle_id)
            if r.conclusive:
                outcomes[key] = "unsolvable" if r.unsolvable else "solvable"
            else:
                outcomes.setdefault(key, "timed out")

        labels = ["solvable", "unsolvable", "timed out"]
        colors = ["#2ecc71", "#e74c3c", "#95a5a6"]
        bottom = np.zeros(len(difficulties))
        for label, color in zip(labels, colors):
            shares = []
            for diff in difficulties:
                boards = [o for (d, _), o in outcomes.items() if d == diff]
                shares.append(100 * boards.count(label) / len(boards) if boards else 0)
            ax.bar(difficulties, shares, bottom=bottom, label=label, color=color, edgecolor='black')
            bottom += shares

        ax.set_xlabel('Difficulty', fontsize=12)
        ax.set_ylabel('Boards (%)', fontsize=12)
        ax.set_title('Board Outcomes by Difficulty', fontsize=14, fontweight='bold')
        ax.set_ylim(0, 100)
        ax.legend()

        return self._save('outcomes_by_difficulty.png')

    def plot_memo_savings(self) -> Optional[str]:
        """Per-board nodes of each plain search against its memoized variant."""
        algorithms = set(self._algorithms())
        pairs = [(p, m) for p, m in MEMO_PAIRS.items() if p in algorithms and m in algorithms]
        if not pairs:
            return None

        fig, ax = plt.subplots(figsize=(8, 8))
        top = 1
        for plain, memo in pairs:
            runs = paired_runs(self.results, plain, memo)
            xs = [a.nodes_explored for a, _ in runs]
            ys = [b.nodes_explored for _, b in runs]
            if xs:
                top = max(top, max(xs))
                ax.scatter(xs, ys, alpha=0.7, label=f"{memo} vs {plain}", color=self.colors[memo])

        # Points below the diagonal are boards where the memo pruned work.
        ax.plot([1, top], [1, top], linestyle='--', color='gray', linewidth=1)
        ax.set_xscale('log')
        ax.set_yscale('log')
        ax.set_xlabel('Nodes without memo', fontsize=12)
        ax.set_ylabel('Nodes with memo', fontsize=12)
        ax.set_title('Dead-Board Memo Pruning', fontsize=14, fontweight='bold')
        ax.legend()

        return self._save('memo_savings.png')

    def generate_summary_table(self, summary: Dict) -> str:
        """
        Write a markdown table from Benchmark.get_summary().

        Returns:
            Path to the markdown file.
        """
        lines = [
            "# Fling Benchmark Summary\n",
            "| Algorithm | Runs | Solved | Unsolvable | Timed out | Avg Nodes | Avg Time | Memo Hits |",
            "|-----------|------|--------|------------|-----------|-----------|----------|-----------|",
        ]
        for algo, stats in summary["by_algorithm"].items():
            lines.append(
                f"| {algo} | {stats['runs']} | {stats['solved']} | {stats['unsolvable']} "
                f"| {stats['timed_out']} | {stats['avg_nodes_explored']:,.0f} "
                f"| {stats['avg_time_seconds'] * 1000:.2f}ms | {stats['memo_hits']:,} |"
            )

        if summary["by_units"]:
            algorithms = list(summary["by_algorithm"])
            lines += [
                "\n## Mean nodes by unit count\n",
                "| Units | " + " | ".join(algorithms) + " |",
                "|-------|" + "|".join("---" for _ in algorithms) + "|",
            ]
            for units, row in summary["by_units"].items():
                cells = [
                    f"{row[a]['avg_nodes_explored']:,.0f}" if a in row else "-"
                    for a in algorithms
                ]
                lines.append(f"| {units} | " + " | ".join(cells) + " |")

        for memo, saving in summary["memo_savings"].items():
            lines.append(
                f"\n{memo} explored {saving['memo_nodes']:,} nodes against "
                f"{saving['plain_nodes']:,} for {saving['baseline']} on "
                f"{saving['puzzles']} boards ({saving['memo_hits']:,} memo hits)."
            )

        path = os.path.join(self.output_dir, "benchmark_summary.md")
        with open(path, "w") as f:
            f.write("\n".join(lines) + "\n")
        return path
