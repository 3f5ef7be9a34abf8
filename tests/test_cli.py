"""Tests for the command-line interface."""

import json

import pytest
from fling.cli import main


# Units at (0, 3) and (3, 3)
TWO_UNITS = "/".join(["......."] * 3 + ["o..o..."] + ["......."] * 4)

# Units at (0, 3), (3, 3) and (3, 6)
L_SHAPE = "/".join(
    ["......."] * 3 + ["o..o..."] + ["......."] * 2 + ["...o..."] + ["......."]
)


class TestSolveCommand:
    """Tests for `fling solve`."""

    def test_solve(self, capsys):
        """Solutions are listed move by move."""
        main(["solve", "--puzzle", TWO_UNITS])
        out = capsys.readouterr().out
        assert "with 1 moves" in out
        assert "1. (0, 3) right" in out

    def test_steps(self, capsys):
        """--steps prints the board before each move and the final board."""
        main(["solve", "--steps", "--puzzle", TWO_UNITS])
        out = capsys.readouterr().out
        assert "Move 1: (0, 3) right" in out
        assert "| > . . o . . . |" in out
        assert "Final board:" in out
        assert "| . . o . . . . |" in out

    def test_unsolvable(self, capsys):
        """Unsolvable boards are reported as such."""
        main(["solve", "--puzzle", L_SHAPE, "--verbose"])
        out = capsys.readouterr().out
        assert "Unsolvable." in out
        assert "Nodes explored: 5" in out

    def test_all_algorithms(self, capsys):
        """Every registered solver runs with --algorithm all."""
        main(["solve", "--algorithm", "all", "--puzzle", TWO_UNITS])
        out = capsys.readouterr().out
        assert out.count("with 1 moves") == 4

    def test_empty_board(self, capsys):
        """A board with no units is not reported as solved."""
        main(["solve", "--puzzle", "." * 56])
        out = capsys.readouterr().out
        assert "Board has no units; nothing to solve." in out
        assert "Solved" not in out

    def test_timeout(self, capsys):
        """A spent budget is reported instead of a result."""
        main(["solve", "--puzzle", TWO_UNITS, "--timeout", "0"])
        out = capsys.readouterr().out
        assert "Gave up after" in out
        assert "Unsolvable." not in out

    def test_bad_puzzle(self, capsys):
        """Malformed boards exit with status 1."""
        with pytest.raises(SystemExit) as excinfo:
            main(["solve", "--puzzle", "0101"])
        assert excinfo.value.code == 1
        assert "Error parsing puzzle" in capsys.readouterr().out


class TestOtherCommands:
    """Tests for the remaining sub-commands."""

    def test_moves(self, capsys):
        """Legal moves are listed in generator order."""
        main(["moves", "--puzzle", L_SHAPE])
        out = capsys.readouterr().out
        assert "4 legal moves" in out
        assert out.index("(3, 3) down") < out.index("(0, 3) right")

    def test_generate(self, capsys, tmp_path):
        """Generated puzzles can be written to JSON."""
        output = tmp_path / "puzzles.json"
        main(["generate", "--count", "2", "--difficulty", "easy",
              "--seed", "4", "--output", str(output)])

        data = json.loads(output.read_text())
        assert len(data) == 2
        assert all(len(p["puzzle"]) == 56 for p in data)
        assert all(len(p["solution"]) == p["units"] - 1 for p in data)
        assert "Total puzzles generated: 2" in capsys.readouterr().out

    def test_benchmark(self, capsys, tmp_path):
        """The benchmark prints a per-algorithm and per-unit summary."""
        output = tmp_path / "bench"
        main(["benchmark", "--puzzles", "2", "--difficulty", "easy",
              "--algorithms", "dfs", "dfs-memo", "--include-unsolvable",
              "--seed", "3", "--output", str(output), "--no-charts"])

        out = capsys.readouterr().out
        assert "Algorithms: dfs, dfs-memo" in out
        assert "Solved: " in out
        assert "By Unit Count" in out
        assert "dfs-memo vs dfs:" in out
        assert (output / "benchmark_summary.json").exists()

    def test_no_command(self):
        """Running without a command prints help and exits 1."""
        with pytest.raises(SystemExit) as excinfo:
            main([])
        assert excinfo.value.code == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
