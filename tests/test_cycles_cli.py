"""Tests for the barrelrails-cycles command."""

import pytest

from barrelrails.cycles_cli import EXIT_CYCLES, EXIT_ERROR, EXIT_OK, format_cycles, main, run
from barrelrails.graph import Cycle


@pytest.fixture
def project(tmp_path, monkeypatch, write_tree):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("BARRELRAILS_LOG_LEVEL", raising=False)
    monkeypatch.chdir(tmp_path)
    return write_tree


CYCLIC = {
    "lib/feature_a/a.dart": "export 'package:app/feature_b/b.dart';\n",
    "lib/feature_b/b.dart": "export '../feature_c/c.dart';\n",
    "lib/feature_c/c.dart": "export 'package:app/feature_a/a.dart';\n",
}


class TestFormatCycles:

    def test_single_cycle(self):
        lines = format_cycles([Cycle(("feature_a/a.dart", "feature_b/b.dart", "feature_a/a.dart"))])
        assert lines == [
            "❌ Found 1 circular dependency:",
            "",
            "Cycle 1:",
            "  feature_a/a.dart",
            "    ↓ exports",
            "  feature_b/b.dart",
            "    ↓ exports back to feature_a/a.dart",
            "",
        ]

    def test_plural(self):
        cycles = [Cycle(("a", "b", "a")), Cycle(("c", "d", "c"))]
        lines = format_cycles(cycles)
        assert lines[0] == "❌ Found 2 circular dependencies:"
        assert "Cycle 2:" in lines


class TestMain:

    def test_no_cycles(self, project, capsys):
        project({
            "lib/feature_a/a.dart": "export 'package:app/feature_b/b.dart';\n",
            "lib/feature_b/b.dart": "",
        })
        assert main([]) == EXIT_OK
        assert "✅ No circular dependencies found!" in capsys.readouterr().out

    def test_cycle_found(self, project, capsys):
        project(CYCLIC)
        assert main([]) == EXIT_CYCLES
        out = capsys.readouterr().out
        assert "❌ Found 1 circular dependency:" in out
        assert "  feature_a/a.dart\n    ↓ exports\n  feature_b/b.dart" in out
        assert "    ↓ exports back to feature_a/a.dart" in out

    def test_root_option(self, project, tmp_path, capsys):
        project({f"src/{path[4:]}": text for path, text in CYCLIC.items()})
        assert main(["--root", str(tmp_path / "src")]) == EXIT_CYCLES

    def test_missing_root(self, project, capsys):
        assert main(["-r", "nowhere"]) == EXIT_ERROR
        assert "Error: Directory not found: nowhere" in capsys.readouterr().err

    def test_invalid_config(self, project, capsys):
        project({"barrelrails.yaml": "extensions: not-a-list\n"})
        assert main([]) == EXIT_ERROR
        assert "Invalid configuration" in capsys.readouterr().err

    def test_verbose_logs_graph(self, project, capsys):
        project(CYCLIC)
        main(["--verbose"])
        err = capsys.readouterr().err
        assert "Found 3 barrel files" in err
        assert "Built dependency graph with 3 nodes" in err

    def test_run_exits_with_code(self, project, monkeypatch):
        project(CYCLIC)
        monkeypatch.setattr("sys.argv", ["barrelrails-cycles"])
        with pytest.raises(SystemExit) as exc_info:
            run()
        assert exc_info.value.code == EXIT_CYCLES
