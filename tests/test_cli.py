## fluxo — CLI integration tests

import os, sys
import subprocess
from pathlib import Path


def run_cli(*cli_args: str | Path, env: dict | None = None, stdin: str | None = None) -> subprocess.CompletedProcess:
    args = [sys.executable, "-m", "fluxo", "--plain"]
    args.extend(str(arg) for arg in cli_args)
    merged_env = os.environ.copy()
    merged_env.pop("FLUXO_WINDOWS", None)
    merged_env.pop("FLUXO_DEBUG", None)
    if env:
        merged_env.update(env)
    return subprocess.run(args, input=stdin, capture_output=True, text=True, env=merged_env)


def fixtures_dir() -> Path:
    return Path(__file__).resolve().parent


def test_cli_runs_script_file():
    result = run_cli(fixtures_dir() / "hello.fluxo")
    assert result.returncode == 0
    assert result.stdout.strip() == "hello"


def test_cli_window_script_with_registry():
    root = fixtures_dir()
    result = run_cli("--windows", root / "windows.json", root / "window-database.fluxo")
    assert result.returncode == 0, result.stdout
    assert result.stdout.strip().split("\n") == ["stored: hello", "640", "Foo", "Return: hello"]


def test_cli_registry_from_environment():
    root = fixtures_dir()
    result = run_cli(root / "window-database.fluxo", env={"FLUXO_WINDOWS": str(root / "windows.json")})
    assert result.returncode == 0, result.stdout
    assert "stored: hello" in result.stdout


def test_cli_block_error_shows_context():
    result = run_cli(fixtures_dir() / "error-block.fluxo")
    assert result.returncode != 0
    out = result.stdout
    assert "SYNTAX ERROR." in out
    assert "File \"" in out and "line 3" in out
    assert "Unterminated block" in out
    assert "before" not in out.split("SYNTAX ERROR.")[0]


def test_cli_missing_window_error():
    result = run_cli(fixtures_dir() / "error-window.fluxo")
    assert result.returncode != 0
    assert "NAME ERROR." in result.stdout
    assert "window-11" in result.stdout


def test_cli_ignore_continues_with_next_file():
    root = fixtures_dir()
    result = run_cli("--ignore", "run-file", root / "error-window.fluxo", root / "hello.fluxo")
    assert "NAME ERROR." in result.stdout
    assert "hello" in result.stdout
    assert result.returncode == 1


def test_cli_reads_stdin():
    result = run_cli("-", stdin='local x = "piped"\nsys.log(x)\n')
    assert result.returncode == 0
    assert result.stdout.strip() == "piped"


def test_cli_no_output_sentinel():
    result = run_cli("-", stdin="// nothing to do\n")
    assert result.stdout.strip() == "Script executed successfully (no output)"


def test_cli_stats_and_verbose():
    result = run_cli("--stats", "-vv", fixtures_dir() / "hello.fluxo")
    assert result.returncode == 0
    assert "STATISTICS." in result.stdout
    assert "sys.log(x)" in result.stdout
