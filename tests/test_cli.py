from __future__ import annotations

import json
import textwrap
from pathlib import Path

from env_blocks.cli import cli

DOCUMENT = textwrap.dedent(
    r"""
    \begin{questionenv}[Proof of X]Text here.\end{questionenv}
    \begin{enumerate}[(a)]
    \item One
    \item Two
    \end{enumerate}
    """
).lstrip()


def _write(tmp_path: Path, filename: str, content: str) -> Path:
    path = tmp_path / filename
    path.write_text(content, encoding="utf-8")
    return path


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_cli_lists_ranges_as_text(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "doc.md", DOCUMENT)

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert lines[0] == "0\t31\tnamed\treplace_start\tProof of X"
    assert lines[1] == "31\t41\tnamed\tmark\t"
    assert [line.split("\t")[4] for line in lines if "replace_item" in line] == ["(a)", "(b)"]
    assert len(lines) == 7


def test_cli_lists_ranges_as_json(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "doc.md", DOCUMENT)

    result = cli_runner.invoke(cli, [str(target), "--output", "json"])

    assert result.exit_code == 0, result.output
    rows = json.loads(result.output)
    assert rows[0] == {
        "start": 0,
        "end": 31,
        "kind": "replace_start",
        "block": "named",
        "payload": "Proof of X",
    }
    assert rows[3]["payload"] == "[(a)]"


def test_cli_prints_nothing_without_blocks(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "plain.md", "Just text.\n")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0
    assert result.output == ""


def test_cli_warns_on_unrecognized_format(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "doc.md", r"\begin{enumerate}[xyz]\item A\end{enumerate}")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0
    assert 'Unrecognized enumerate format: "xyz"' in result.output
    assert "\t1.\n" in result.output


def test_cli_rename_block_rewrites_file(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "doc.md", DOCUMENT)

    result = cli_runner.invoke(cli, [str(target), "--rename-block", "1", "Proof of Y"])

    assert result.exit_code == 0, result.output
    contents = target.read_text(encoding="utf-8")
    assert contents.startswith(r"\begin{questionenv}[Proof of Y]Text here.")
    assert r"\begin{enumerate}[(a)]" in contents


def test_cli_set_format_rewrites_file(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "doc.md", DOCUMENT)

    result = cli_runner.invoke(cli, [str(target), "--set-format", "1", "I."])

    assert result.exit_code == 0, result.output
    assert r"\begin{enumerate}[I.]" in target.read_text(encoding="utf-8")


def test_cli_unchanged_edit_leaves_file(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "doc.md", DOCUMENT)

    result = cli_runner.invoke(cli, [str(target), "--set-format", "1", "(a)"])

    assert result.exit_code == 0
    assert "unchanged" in result.output
    assert target.read_text(encoding="utf-8") == DOCUMENT


def test_cli_rejects_missing_block_index(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "doc.md", DOCUMENT)

    result = cli_runner.invoke(cli, [str(target), "--rename-block", "2", "Nope"])

    assert result.exit_code != 0
    assert "block 2 does not exist" in result.output
    assert target.read_text(encoding="utf-8") == DOCUMENT


def test_cli_rejects_invalid_name(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "doc.md", DOCUMENT)

    result = cli_runner.invoke(cli, [str(target), "--rename-block", "1", "a]b"])

    assert result.exit_code != 0
    assert target.read_text(encoding="utf-8") == DOCUMENT


def test_cli_rejects_both_edit_options(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "doc.md", DOCUMENT)

    result = cli_runner.invoke(
        cli, [str(target), "--rename-block", "1", "X", "--set-format", "1", "a"]
    )

    assert result.exit_code != 0
    assert "not both" in result.output


def test_cli_uses_config_file(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.env-blocks]
        default_format = "i)"
        """,
    )
    target = _write(tmp_path, "doc.md", r"\begin{enumerate}\item A\item B\end{enumerate}")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0, result.output
    assert "\ti)\n" in result.output
    assert "\tii)\n" in result.output


def test_cli_option_overrides_config(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "doc.tex", r"\begin{steps}\step A\end{steps}")

    result = cli_runner.invoke(
        cli, [str(target), "--list-env", "steps", "--item-marker", "\\step"]
    )

    assert result.exit_code == 0, result.output
    assert "\t1.\n" in result.output


def test_cli_rejects_invalid_config(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "doc.md", DOCUMENT)

    result = cli_runner.invoke(cli, [str(target), "--default-format", "zz"])

    assert result.exit_code != 0
    assert "default_format" in result.output


def test_cli_rejects_file_outside_working_directory(cli_runner, tmp_path, monkeypatch):
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    target = _write(tmp_path, "doc.md", DOCUMENT)

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code != 0
    assert "outside of the working directory" in result.output


def test_cli_enforces_max_file_size(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("ENV_BLOCKS_MAX_FILE_SIZE", "10")
    target = _write(tmp_path, "doc.md", DOCUMENT)

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code != 0
    assert "exceeds the maximum allowed size" in result.output


def test_cli_rejects_invalid_utf8(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = tmp_path / "bad.md"
    target.write_bytes(b"\xff\xfe\xfa")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code != 0
    assert "Invalid UTF-8 sequence" in result.output


def test_cli_lists_only_named_block_when_list_crosses_its_marker(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    text = r"\begin{questionenv}[\begin{enumerate}]x\end{questionenv}\item\end{enumerate}"
    target = _write(tmp_path, "doc.md", text)

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert [line.split("\t")[2] for line in lines] == ["named", "named", "named"]
    assert lines[0].split("\t")[:2] == ["0", "38"]
