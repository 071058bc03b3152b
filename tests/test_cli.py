# =============================================================================
# test_cli.py - fidlparse Command-Line Tests
# =============================================================================
# Tests for the fidlparse click command using click's CliRunner.
# =============================================================================

from click.testing import CliRunner

from fidl_frontend import __version__
from fidl_frontend.cli.fidlparse import main


GOOD_SOURCE = "library foo; using bar; struct S { int32 x; }; union U { bool b; };"
BAD_SOURCE = "library foo; struct { int32 x; };"


# =============================================================================
# Helper Function
# =============================================================================

def write(tmp_path, name: str, text: str) -> str:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return str(path)


# =============================================================================
# CLI Tests
# =============================================================================

class TestFidlparse:
    """Test the fidlparse command."""

    def test_success_summary(self, tmp_path):
        path = write(tmp_path, "good.fidl", GOOD_SOURCE)
        result = CliRunner().invoke(main, [path])
        assert result.exit_code == 0
        assert f"Parsed {path}: library foo" in result.output
        assert "1 using, 0 const, 0 enum, 0 interface, 1 struct, 1 union" in result.output

    def test_failure_exit_code(self, tmp_path):
        path = write(tmp_path, "bad.fidl", BAD_SOURCE)
        result = CliRunner().invoke(main, [path])
        assert result.exit_code == 1
        assert "found unexpected token: {" in result.output
        assert "on line #1:" in result.output

    def test_ast_output(self, tmp_path):
        path = write(tmp_path, "good.fidl", GOOD_SOURCE)
        result = CliRunner().invoke(main, ["--ast", path])
        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert "Library: foo" in lines
        assert "  Struct: S" in lines
        assert "    int32 x" in lines

    def test_tokens_output(self, tmp_path):
        path = write(tmp_path, "good.fidl", "library foo;")
        result = CliRunner().invoke(main, ["--tokens", path])
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "Token(LIBRARY, 'library', 1:1)",
            "Token(IDENTIFIER, 'foo', 1:9)",
            "Token(SEMICOLON, ';', 1:12)",
            "Token(END_OF_FILE, 1:13)",
        ]

    def test_stops_after_first_failure(self, tmp_path):
        bad = write(tmp_path, "bad.fidl", BAD_SOURCE)
        good = write(tmp_path, "good.fidl", GOOD_SOURCE)
        result = CliRunner().invoke(main, [bad, good])
        assert result.exit_code == 1
        assert "Parsed" not in result.output

    def test_keep_going(self, tmp_path):
        bad = write(tmp_path, "bad.fidl", BAD_SOURCE)
        good = write(tmp_path, "good.fidl", GOOD_SOURCE)
        result = CliRunner().invoke(main, ["--keep-going", bad, good])
        assert result.exit_code == 1
        assert f"Parsed {good}: library foo" in result.output

    def test_verbose(self, tmp_path):
        path = write(tmp_path, "good.fidl", GOOD_SOURCE)
        result = CliRunner().invoke(main, ["-v", path])
        assert result.exit_code == 0

    def test_missing_file(self, tmp_path):
        result = CliRunner().invoke(main, [str(tmp_path / "missing.fidl")])
        assert result.exit_code == 2

    def test_no_files(self):
        result = CliRunner().invoke(main, [])
        assert result.exit_code == 2

    def test_version(self):
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output
