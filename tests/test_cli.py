import io
import logging
from pathlib import Path

import pytest

from rangecut.cli import CutCommand, _log_level, main, split_lines


def run(args: list[str], cwd: Path, stdin: str | None = None) -> tuple[str, int]:
    command = CutCommand(args)
    output = command.execute(cwd, stdin)
    return output, command.status_code


def test_characters_from_stdin(tmp_path: Path) -> None:
    output, status = run(["-c", "1-3", "-"], tmp_path, "abcdef\nxyz\nq\n")

    assert status == 0
    assert output == "abc\nxyz\nq\n"


def test_characters_from_file(tmp_path: Path) -> None:
    (tmp_path / "in.txt").write_text("hello world\nfoo\n", encoding="utf-8")

    output, status = run(["-c", "1,7-", "in.txt"], tmp_path)

    assert status == 0
    assert output == "hworld\nf\n"


def test_fields_from_file(tmp_path: Path) -> None:
    (tmp_path / "in.csv").write_text("a,b,c,d\ne,f,g,h\n", encoding="utf-8")

    output, status = run(["-d", ",", "1,3", "in.csv"], tmp_path)

    assert status == 0
    assert output == "a,c\ne,g\n"


def test_file_path_resolves_against_working_dir(tmp_path: Path) -> None:
    sub = tmp_path / "data"
    sub.mkdir()
    (sub / "in.txt").write_text("abc\n", encoding="utf-8")

    output, status = run(["-c", "2", "data/in.txt"], tmp_path)

    assert status == 0
    assert output == "b\n"


def test_empty_delimiter_means_tab(tmp_path: Path) -> None:
    output, status = run(["-d", "", "2", "-"], tmp_path, "a\tb\tc\n")

    assert status == 0
    assert output == "b\n"


def test_stdin_stream_and_crlf(tmp_path: Path) -> None:
    output, status = run(["-c", "2-", "-"], tmp_path, io.StringIO("abc\r\nxyz"))

    assert status == 0
    assert output == "bc\nyz\n"


def test_range_list_parsed_once(tmp_path: Path) -> None:
    command = CutCommand(["-c", "1", "-"])

    command.execute(tmp_path, "a\nb\nc\nd\n")

    assert command.extractor.engine.parse_count == 1


@pytest.mark.parametrize("flag", ["-help", "--help"])
def test_help(tmp_path: Path, flag: str) -> None:
    command = CutCommand([flag])

    output = command.execute(tmp_path, None)

    assert command.status_code == 0
    assert output == command.help()
    assert "cut [OPTIONS] [FILE]" in output
    assert "-c LIST" in output
    assert "-d DELIM" in output


def test_no_options(tmp_path: Path) -> None:
    command = CutCommand([])

    output = command.execute(tmp_path, "abc\n")

    assert command.status_code == 9
    assert output == command.help()


def test_more_than_one_option(tmp_path: Path) -> None:
    output, status = run(["-c", "1", "-d", ",", "1", "-"], tmp_path, "a,b\n")

    assert status == 9
    assert output.startswith("Error: More than one option.")


def test_help_with_other_option_is_rejected(tmp_path: Path) -> None:
    _, status = run(["-help", "-c", "1", "-"], tmp_path, "abc\n")

    assert status == 9


@pytest.mark.parametrize(
    "args",
    [
        ["-x", "-"],
        ["-c"],
        ["-c", "1"],
        ["-c", "1", "a.txt", "b.txt"],
        ["-d", ","],
        ["-d", ",", "1"],
    ],
)
def test_usage_errors(tmp_path: Path, args: list[str]) -> None:
    output, status = run(args, tmp_path, "abc\n")

    assert status == 9
    assert "cut [OPTIONS] [FILE]" in output


def test_invalid_range(tmp_path: Path) -> None:
    output, status = run(["-c", "0-2", "-"], tmp_path, "abcdef\n")

    assert status == 9
    assert output == "Values may not include zero.\n"


def test_malformed_range(tmp_path: Path) -> None:
    output, status = run(["-d", ",", "1,b", "-"], tmp_path, "a,b\n")

    assert status == 9
    assert "'b'" in output


def test_malformed_range_with_empty_input(tmp_path: Path) -> None:
    _, status = run(["-c", "3-1", "-"], tmp_path, "")

    assert status == 9


def test_missing_file(tmp_path: Path) -> None:
    _, status = run(["-c", "1", "missing.txt"], tmp_path)

    assert status == 1


def test_undecodable_file(tmp_path: Path) -> None:
    (tmp_path / "bin.dat").write_bytes(b"\xff\xfe\xfa")

    _, status = run(["-c", "1", "bin.dat"], tmp_path)

    assert status == 2


def test_status_resets_between_runs(tmp_path: Path) -> None:
    command = CutCommand(["-c", "1", "missing.txt"])
    command.execute(tmp_path, None)
    assert command.status_code == 1

    (tmp_path / "missing.txt").write_text("xyz\n", encoding="utf-8")
    assert command.execute(tmp_path, None) == "x\n"
    assert command.status_code == 0


def test_main_writes_stdout(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("abc\ndef\n"))

    status = main(["-c", "2", "-"])

    captured = capsys.readouterr()
    assert status == 0
    assert captured.out == "b\ne\n"
    assert captured.err == ""


def test_main_reports_errors_on_stderr(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("abc\n"))

    status = main(["-c", "0", "-"])

    captured = capsys.readouterr()
    assert status == 9
    assert captured.out == ""
    assert "Values may not include zero." in captured.err


def test_rejected_range_is_logged(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.INFO, logger="rangecut"):
        run(["-c", "0", "-"], tmp_path, "abc\n")

    assert any("Rejected range list" in r.getMessage() for r in caplog.records)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", []),
        ("abc", ["abc"]),
        ("abc\n", ["abc"]),
        ("a\n\nb\n\n", ["a", "", "b", ""]),
        ("a\r\nb\rc\n", ["a", "b", "c"]),
        (
            "a\x0cb\x0bc\x1cd\x85e\u2028f\u2029g\n",
            ["a\x0cb\x0bc\x1cd\x85e\u2028f\u2029g"],
        ),
    ],
)
def test_split_lines(text: str, expected: list[str]) -> None:
    assert split_lines(text) == expected


def test_form_feed_and_unicode_separators_stay_in_line(tmp_path: Path) -> None:
    output, status = run(["-c", "1-3", "-"], tmp_path, "ab\x0ccd\nxy\u2028z\n")

    assert status == 0
    assert output == "ab\x0c\nxy\u2028\n"


def test_main_ignores_unknown_log_level(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("RANGECUT_LOG_LEVEL", "verbose")
    monkeypatch.setattr("sys.stdin", io.StringIO("abc\n"))

    status = main(["-c", "1", "-"])

    assert status == 0
    assert capsys.readouterr().out == "a\n"


def test_oversized_range_bound(tmp_path: Path) -> None:
    output, status = run(["-c", "1" * 5000, "-"], tmp_path, "abc\n")

    assert status == 9
    assert "too large" in output


@pytest.mark.parametrize(
    "name, level",
    [
        ("debug", logging.DEBUG),
        ("INFO", logging.INFO),
        ("verbose", logging.WARNING),
        ("", logging.WARNING),
    ],
)
def test_log_level_names(name: str, level: int) -> None:
    assert _log_level(name) == level
