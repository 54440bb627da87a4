import io
import os
import subprocess
import sys
from contextlib import contextmanager
from pathlib import Path

import pytest

from mif_compile import cli, files
from mif_compile.cli import main, parse_count
from mif_core.errors import BadNumberFormat, ExitStatus, NumericOverflow

REPO = Path(__file__).resolve().parents[1]

HEADER = (
    "DEPTH = {depth};\n"
    "WIDTH = {width};\n"
    "ADDRESS_RADIX = HEX;\n"
    "DATA_RADIX = HEX;\n"
    "CONTENT\n"
    "BEGIN\n"
)


def run(*args, stdin: bytes = b""):
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(REPO / "src"), env.get("PYTHONPATH")]))
    return subprocess.run(
        [sys.executable, "-m", "mif_compile.cli", *args],
        cwd=REPO,
        env=env,
        input=stdin,
        capture_output=True,
        check=False,
    )


class BadClose(io.BytesIO):
    def close(self):
        already = self.closed
        super().close()
        if not already:
            raise OSError(28, "No space left on device")


class FailingRead:
    def read(self, n: int) -> bytes:
        raise OSError(5, "Input/output error")


class BrokenPipe(io.BytesIO):
    def write(self, b) -> int:
        raise BrokenPipeError(32, "Broken pipe")


@pytest.fixture
def image(tmp_path):
    def make(data: bytes) -> Path:
        p = tmp_path / "image.bin"
        p.write_bytes(data)
        return p

    return make


def test_file_to_file(image, tmp_path):
    out = tmp_path / "image.mif"
    r = run(str(image(b"\x00\x01\x02\x03")), "-d", "4", "-o", str(out))

    assert r.returncode == 0, r.stderr
    assert r.stdout == b""
    assert out.read_text(encoding="ascii") == (
        HEADER.format(depth=4, width=8) + "0 : 00;\n1 : 01;\n2 : 02;\n3 : 03;\nEND;\n"
    )


def test_depth_inferred_and_written_to_stdout(image):
    r = run(str(image(bytes(range(10)))), "--width", "16")

    assert r.returncode == 0, r.stderr
    assert r.stdout.decode("ascii") == (
        HEADER.format(depth=5, width=16)
        + "0 : 0100;\n1 : 0302;\n2 : 0504;\n3 : 0706;\n4 : 0908;\nEND;\n"
    )


def test_stdin_with_explicit_depth():
    r = run("-w", "32", "-d", "1", stdin=b"\xef\xbe\xad\xde")

    assert r.returncode == 0, r.stderr
    assert r.stdout.decode("ascii").splitlines()[-2:] == ["0 : deadbeef;", "END;"]


def test_stdin_without_depth(tmp_path):
    out = tmp_path / "image.mif"
    r = run("-o", str(out), stdin=b"\x00\x01")

    assert r.returncode == ExitStatus.DEPTH_REQUIRED
    assert b"FATAL" in r.stderr
    assert not out.exists()


def test_early_stop_keeps_partial_output(image, tmp_path):
    out = tmp_path / "image.mif"
    r = run(str(image(b"\x00\x01\x02")), "-d", "4", "-o", str(out))

    assert r.returncode == ExitStatus.EARLY_STOP
    assert b"4 words were requested, but only 3 could be generated" in r.stderr
    assert b"WARNING: unexpected EOF after 3 of 4 words\n" in r.stderr
    assert b"warn(" not in r.stderr
    assert out.read_text(encoding="ascii").endswith("2 : 02;\nEND;\n")


@pytest.mark.parametrize(
    "args,status",
    [
        (["-w", "abc"], ExitStatus.BAD_NUMBER_FORMAT),
        (["-d", "12x"], ExitStatus.BAD_NUMBER_FORMAT),
        (["-w", "256"], ExitStatus.NUMERIC_OVERFLOW),
        (["--width=-8"], ExitStatus.NUMERIC_OVERFLOW),
        (["-d", "99999999999999999999"], ExitStatus.NUMERIC_OVERFLOW),
        (["-w", "12"], ExitStatus.INVALID_ARGUMENTS),
        (["-w", "0"], ExitStatus.INVALID_ARGUMENTS),
        (["--depth=-1"], ExitStatus.INVALID_ARGUMENTS),
        (["--bogus"], ExitStatus.INVALID_ARGUMENTS),
    ],
)
def test_argument_errors(image, args, status):
    r = run(str(image(b"\x00")), *args)

    assert r.returncode == status, r.stderr
    assert r.stdout == b""


def test_surplus_arguments(image):
    p = str(image(b"\x00"))
    assert run(p, p).returncode == ExitStatus.INVALID_ARGUMENTS


def test_missing_input(tmp_path):
    r = run(str(tmp_path / "missing.bin"), "-d", "1")

    assert r.returncode == ExitStatus.OPEN_FAILURE
    assert b"missing.bin" in r.stderr


def test_help():
    r = run("-h")

    assert r.returncode == 0
    assert b"Usage:" in r.stdout
    assert b"--width" in r.stdout


def test_main_in_process(image, tmp_path, capsys):
    out = tmp_path / "image.mif"
    main([str(image(b"\x12\x34")), "-w", "16", "-o", str(out)])

    assert out.read_text(encoding="ascii").endswith("0 : 3412;\nEND;\n")

    with pytest.raises(SystemExit) as exc:
        main([str(image(b"\x12\x34")), "-w", "1x"])
    assert exc.value.code == ExitStatus.BAD_NUMBER_FORMAT
    assert "FATAL: bad number format" in capsys.readouterr().err


@pytest.mark.parametrize("text,value", [("8", 8), ("+16", 16), (" 24", 24), ("-3", -3)])
def test_parse_count(text, value):
    assert parse_count(text, -10, 255) == value


@pytest.mark.parametrize("text", ["", "0x10", "1e3", "8 bits", "--1", "24 ", "16\n"])
def test_parse_count_bad_format(text):
    with pytest.raises(BadNumberFormat):
        parse_count(text, 0, 255)


def test_parse_count_range():
    with pytest.raises(NumericOverflow) as exc:
        parse_count("256", 0, 255)
    assert (exc.value.low, exc.value.high) == (0, 255)


def test_close_failure_status(monkeypatch, capsys):
    monkeypatch.setattr(files, "open", lambda path, mode="r": BadClose(), raising=False)

    with pytest.raises(SystemExit) as exc:
        main(["in.bin", "-d", "0", "-o", "out.mif"])

    assert exc.value.code == ExitStatus.CLOSE_FAILURE
    err = capsys.readouterr().err
    assert "FATAL: failed to close out.mif: No space left on device" in err
    # The input close fails too, but only the first failure is the outcome.
    assert "WARNING: closing file in.bin" in err


def test_read_failure_status(monkeypatch, tmp_path, capsys):
    @contextmanager
    def failing_input(path):
        yield FailingRead()

    monkeypatch.setattr(cli, "open_input", failing_input)
    out = tmp_path / "image.mif"

    with pytest.raises(SystemExit) as exc:
        main(["image.bin", "-d", "2", "-o", str(out)])

    assert exc.value.code == ExitStatus.GENERATION_FAILURE
    assert "FATAL: reading binary words from input: Input/output error" in capsys.readouterr().err
    assert out.read_text(encoding="ascii").endswith("BEGIN\n")


def test_write_failure_status(monkeypatch, image, capsys):
    @contextmanager
    def broken_output(path):
        yield BrokenPipe()

    monkeypatch.setattr(cli, "open_output", broken_output)

    with pytest.raises(SystemExit) as exc:
        main([str(image(b"\x00\x01")), "-o", "out.mif"])

    assert exc.value.code == ExitStatus.GENERATION_FAILURE
    assert "FATAL: writing record to output: Broken pipe" in capsys.readouterr().err
