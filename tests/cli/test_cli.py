"""Tests for the litweb command line."""

import pytest
from typer.testing import CliRunner

from litweb import __version__
from litweb.cli.main import app

pytestmark = pytest.mark.unit


@pytest.fixture
def runner():
    """CLI test runner."""
    return CliRunner()


class TestCommandsExist:
    def test_main_help_lists_commands(self, runner):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ["tangle", "list", "weave", "expand", "chunks", "run"]:
            assert command in result.output

    def test_version(self, runner):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert result.stdout.strip() == __version__


class TestList:
    def test_list_prints_file_chunks(self, runner, write_doc):
        doc = write_doc("<<main.c>>=\n@\n<<helpers>>=\n@\n<<lib/io.c>>=\n@\n")
        result = runner.invoke(app, ["list", str(doc)])
        assert result.exit_code == 0
        assert result.stdout == "main.c\nlib/io.c\n"

    def test_missing_document_exit_code(self, runner, tmp_path):
        result = runner.invoke(app, ["list", str(tmp_path / "nope.nw")])
        assert result.exit_code == 2
        assert "not found" in result.output


class TestTangle:
    def test_tangle_writes_files(self, runner, hello_doc):
        result = runner.invoke(app, ["tangle", str(hello_doc)])
        assert result.exit_code == 0
        assert (hello_doc.parent / "main.c").exists()
        assert (hello_doc.parent / "lib" / "io.c").exists()

    def test_tangle_target_option(self, runner, hello_doc, tmp_path):
        out = tmp_path / "out"
        result = runner.invoke(app, ["tangle", str(hello_doc), "--target", str(out)])
        assert result.exit_code == 0
        assert (out / "main.c").exists()

    def test_missing_chunk_exit_code(self, runner, write_doc):
        doc = write_doc("<<a.txt>>=\n<<Ghost>>\n@\n")
        result = runner.invoke(app, ["tangle", str(doc)])
        assert result.exit_code == 3
        assert "Ghost" in result.output
        assert not (doc.parent / "a.txt").exists()

    def test_strict_flag(self, runner, write_doc):
        doc = write_doc("<<a.txt>>=\nx\n")
        result = runner.invoke(app, ["--strict", "tangle", str(doc)])
        assert result.exit_code == 3
        assert "never closed" in result.output

    def test_run_with_command_name(self, runner, hello_doc):
        result = runner.invoke(app, ["run", "tangle", str(hello_doc)])
        assert result.exit_code == 0
        assert (hello_doc.parent / "main.c").exists()

    def test_run_rejects_unknown_command(self, runner, hello_doc):
        result = runner.invoke(app, ["run", "knit", str(hello_doc)])
        assert result.exit_code == 1
        assert "Unknown command knit" in result.output
        assert not (hello_doc.parent / "main.c").exists()


class TestWeave:
    def test_weave_writes_html(self, runner, hello_doc):
        result = runner.invoke(app, ["weave", str(hello_doc)])
        assert result.exit_code == 0
        assert hello_doc.with_suffix(".html").exists()


class TestInspect:
    def test_expand_single_chunk(self, runner, hello_doc):
        result = runner.invoke(app, ["expand", str(hello_doc), "body", "--indent", "  "])
        assert result.exit_code == 0
        assert result.stdout == '  puts("hello");\n  return 0;\n'

    def test_expand_unknown_chunk(self, runner, hello_doc):
        result = runner.invoke(app, ["expand", str(hello_doc), "nothing"])
        assert result.exit_code == 3

    def test_chunks_table(self, runner, hello_doc):
        result = runner.invoke(app, ["chunks", str(hello_doc)])
        assert result.exit_code == 0
        for name in ["main.c", "includes", "body", "lib/io.c"]:
            assert name in result.stdout
        assert "macro" in result.stdout


def test_bad_config_file(runner, hello_doc, tmp_path):
    result = runner.invoke(app, ["--config", str(tmp_path / "missing.yaml"), "list", str(hello_doc)])
    assert result.exit_code == 1
    assert "Config error" in result.output


def test_config_file_values(runner, tmp_path, monkeypatch):
    cfg = tmp_path / "litweb.yaml"
    cfg.write_text("weave_suffix: .xhtml\nstrict_chunks: true\n")
    result = runner.invoke(app, ["--config", str(cfg), "config"])
    assert result.exit_code == 0
    assert "WEAVE_SUFFIX=.xhtml" in result.stdout
    assert "STRICT_CHUNKS=True" in result.stdout


class TestOperatorErrors:
    """Bad input and bad settings end in a message and an exit code."""

    def test_undecodable_document(self, runner, tmp_path):
        doc = tmp_path / "binary.nw"
        doc.write_bytes(b"<<a.txt>>=\n\xff\xfe\n@\n")
        result = runner.invoke(app, ["tangle", str(doc)])
        assert result.exit_code == 2
        assert "not valid utf-8" in result.output
        assert not (tmp_path / "a.txt").exists()

    def test_weave_suffix_without_dot(self, runner, hello_doc, monkeypatch):
        monkeypatch.setenv("LITWEB_WEAVE_SUFFIX", "html")
        result = runner.invoke(app, ["weave", str(hello_doc)])
        assert result.exit_code == 1
        assert "Config error" in result.output

    def test_unknown_source_encoding(self, runner, hello_doc, monkeypatch):
        monkeypatch.setenv("LITWEB_SOURCE_ENCODING", "utf-9")
        result = runner.invoke(app, ["list", str(hello_doc)])
        assert result.exit_code == 1
        assert "Config error" in result.output

    def test_deep_inclusion_chain(self, runner, write_doc):
        depth = 1200
        parts = ["<<deep.txt>>=\n<<c0>>\n@\n"]
        parts += [f"<<c{i}>>=\n<<c{i + 1}>>\n@\n" for i in range(depth)]
        parts.append(f"<<c{depth}>>=\nbottom\n@\n")
        doc = write_doc("".join(parts))
        result = runner.invoke(app, ["tangle", str(doc)])
        assert result.exit_code == 3
        assert "too deeply" in result.output
        assert not (doc.parent / "deep.txt").exists()
