from __future__ import annotations

import hashlib
import os
import subprocess
import sys
from pathlib import Path

import pytest

pytest.importorskip("typer")

from filedigest import __version__
from filedigest.cli import main
from filedigest.storage import file_io
from filedigest.utils.errors import AllocationError

ABC_DIGEST = "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
EMPTY_DIGEST = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def _run_cli(*args: str) -> subprocess.CompletedProcess[bytes]:
    command = [sys.executable, "-m", "filedigest.cli", *args]
    env = os.environ.copy()
    module_root = Path(__file__).resolve().parents[2] / "src"
    env["PYTHONPATH"] = (
        f"{module_root}{os.pathsep}{env['PYTHONPATH']}"
        if env.get("PYTHONPATH")
        else str(module_root)
    )
    return subprocess.run(
        command,
        check=False,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        env=env,
    )


def test_cli_prints_digest_line(tmp_path: Path) -> None:
    sample = tmp_path / "abc.txt"
    sample.write_bytes(b"abc")
    result = _run_cli(str(sample))
    assert result.returncode == 0
    assert result.stdout.decode("utf-8") == f"SHA256({sample}) = {ABC_DIGEST}\n"


def test_cli_rejects_empty_file(tmp_path: Path) -> None:
    sample = tmp_path / "empty"
    sample.write_bytes(b"")
    result = _run_cli(str(sample))
    assert result.returncode == 1
    assert result.stdout == b""
    assert b"empty" in result.stderr.lower()


def test_cli_missing_file(tmp_path: Path) -> None:
    result = _run_cli(str(tmp_path / "does-not-exist"))
    assert result.returncode == 1
    assert result.stdout == b""
    assert result.stderr


def test_cli_without_arguments_prints_usage() -> None:
    result = _run_cli()
    assert result.returncode == 1
    assert result.stdout == b""
    assert b"Usage" in result.stderr


def test_cli_reports_version() -> None:
    result = _run_cli("--version")
    assert result.returncode == 0
    assert result.stdout.decode("utf-8").strip() == f"filedigest {__version__}"


def test_main_extra_argument_is_usage_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    sample = tmp_path / "abc.txt"
    sample.write_bytes(b"abc")
    assert main([str(sample), str(sample)]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "filedigest:" in captured.err


@pytest.mark.parametrize("strategy", ["auto", "mapped", "buffered"])
def test_main_forced_strategy(tmp_path: Path, capsys: pytest.CaptureFixture[str], strategy: str) -> None:
    data = os.urandom(20_000)
    sample = tmp_path / "data.bin"
    sample.write_bytes(data)
    assert main(["--strategy", strategy, str(sample)]) == 0
    captured = capsys.readouterr()
    assert captured.out == f"SHA256({sample}) = {hashlib.sha256(data).hexdigest()}\n"


def test_main_allow_empty(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    sample = tmp_path / "empty"
    sample.write_bytes(b"")
    assert main(["--allow-empty", str(sample)]) == 0
    assert capsys.readouterr().out == f"SHA256({sample}) = {EMPTY_DIGEST}\n"


def test_main_path_printed_as_given(tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "abc.txt").write_bytes(b"abc")
    monkeypatch.chdir(tmp_path)
    assert main(["./abc.txt"]) == 0
    assert capsys.readouterr().out == f"SHA256(./abc.txt) = {ABC_DIGEST}\n"


def test_main_progress_keeps_stdout_clean(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    sample = tmp_path / "abc.txt"
    sample.write_bytes(b"abc")
    assert main(["--progress", str(sample)]) == 0
    assert capsys.readouterr().out == f"SHA256({sample}) = {ABC_DIGEST}\n"


def test_main_without_arguments_prints_usage(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Usage" in captured.err
    assert "filedigest:" in captured.err


def test_main_rejects_unknown_log_level(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    sample = tmp_path / "abc.txt"
    sample.write_bytes(b"abc")
    assert main(["--log-level", "chatty", str(sample)]) == 1
    assert capsys.readouterr().out == ""


def test_main_fails_when_mapping_and_buffer_both_fail(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    def _refuse_map(fd: int, size: int):
        raise OSError(12, "Cannot allocate memory")

    def _refuse_buffer(size: int, alignment: int):
        raise AllocationError(f"cannot allocate {size} byte read buffer")

    monkeypatch.setattr(file_io, "_map_readonly", _refuse_map)
    monkeypatch.setattr(file_io, "_allocate_buffer", _refuse_buffer)
    sample = tmp_path / "data.bin"
    sample.write_bytes(b"x" * 100)
    assert main(["--strategy", "mapped", str(sample)]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "cannot allocate" in captured.err
