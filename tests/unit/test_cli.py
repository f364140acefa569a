"""Tests for CLI module."""

import json
from pathlib import Path
from types import SimpleNamespace

import pytest
from click.testing import CliRunner

from bibresolve.cli.main import cli
from bibresolve.engine import runner as engine_runner


@pytest.fixture
def runner() -> CliRunner:
    """Provide Click test CLI runner."""
    return CliRunner()


@pytest.fixture
def served(monkeypatch: pytest.MonkeyPatch, fake_fetcher, html_page):
    """Route the CLI's default fetcher to a fake serving two pages.

    Returns the fake fetcher and the list of configs it was built from.
    """
    fake_fetcher.add("https://example.com/a", html_page(head="<title>Page A</title>"))
    fake_fetcher.add("https://example.com/b", html_page(head="<title>Page B</title>"))
    configs: list = []

    def from_config(config):
        configs.append(config)
        return fake_fetcher

    monkeypatch.setattr(engine_runner, "HttpFetcher", SimpleNamespace(from_config=from_config))
    return fake_fetcher, configs


# ---------------------------------------------------------------------------
# Top-level CLI
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_cli_version_flag(runner: CliRunner) -> None:
    """Test --version flag outputs version string."""
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "bibresolve" in result.output


@pytest.mark.unit
def test_cli_help(runner: CliRunner) -> None:
    """Test --help output lists commands."""
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "fetch" in result.output
    assert "pull" in result.output


@pytest.mark.unit
def test_cli_invalid_command(runner: CliRunner) -> None:
    """Test invalid command returns non-zero exit code."""
    result = runner.invoke(cli, ["invalid-command"])

    assert result.exit_code != 0


# ---------------------------------------------------------------------------
# fetch command
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_fetch_help(runner: CliRunner) -> None:
    """Test fetch command help."""
    result = runner.invoke(cli, ["fetch", "--help"])

    assert result.exit_code == 0
    assert "--jobs" in result.output
    assert "--audit-log" in result.output


@pytest.mark.unit
def test_fetch_requires_identifiers(runner: CliRunner) -> None:
    """Test fetch without arguments is a usage error."""
    result = runner.invoke(cli, ["fetch"])

    assert result.exit_code == 2


@pytest.mark.unit
def test_fetch_prints_entries_in_input_order(runner: CliRunner, served) -> None:
    """Test entries go to stdout in input order, failures and summary to stderr."""
    result = runner.invoke(
        cli,
        ["fetch", "https://example.com/b", "nonsense", "https://example.com/a"],
    )

    assert result.exit_code == 0
    assert result.stdout.index("@online{web:example.com:b,") < result.stdout.index(
        "@online{web:example.com:a,"
    )
    assert "nonsense" not in result.stdout
    assert "✗ nonsense: unrecognized identifier: nonsense" in result.stderr
    assert "✓ 2 ✗ 1 total 3 elapsed " in result.stderr


@pytest.mark.unit
def test_fetch_exits_zero_when_everything_fails(runner: CliRunner, served) -> None:
    """Test per-identifier failures never change the exit code."""
    result = runner.invoke(cli, ["fetch", "https://example.com/missing"])

    assert result.exit_code == 0
    assert result.stdout == ""
    assert "✗ https://example.com/missing: failed request for URL" in result.stderr
    assert "✓ 0 ✗ 1 total 1" in result.stderr


@pytest.mark.unit
def test_fetch_options_reach_config(runner: CliRunner, served) -> None:
    """Test --jobs, --user-agent and --timeout build the resolver config."""
    _, configs = served

    result = runner.invoke(
        cli,
        ["fetch", "https://example.com/a", "-j", "2", "--user-agent", "ua/1", "--timeout", "3"],
    )

    assert result.exit_code == 0
    assert configs[0].max_workers == 2
    assert configs[0].user_agent == "ua/1"
    assert configs[0].read_timeout == 3.0


@pytest.mark.unit
def test_fetch_options_from_environment(runner: CliRunner, served) -> None:
    """Test options fall back to BIBRESOLVE_* environment variables."""
    _, configs = served

    result = runner.invoke(
        cli,
        ["fetch", "https://example.com/a"],
        env={"BIBRESOLVE_JOBS": "4", "BIBRESOLVE_TIMEOUT": "2.5"},
    )

    assert result.exit_code == 0
    assert configs[0].max_workers == 4
    assert configs[0].read_timeout == 2.5


@pytest.mark.unit
@pytest.mark.parametrize(
    "args",
    [
        ["--jobs", "0"],
        ["--timeout", "0"],
        ["--user-agent", "   "],
    ],
)
def test_fetch_rejects_invalid_options(runner: CliRunner, served, args: list[str]) -> None:
    """Test invalid option values are usage errors."""
    result = runner.invoke(cli, ["fetch", "https://example.com/a", *args])

    assert result.exit_code == 2
    assert "Invalid value" in result.output


@pytest.mark.unit
def test_fetch_verbose_flag(runner: CliRunner, served) -> None:
    """Test verbose flag produces a progress line on stderr."""
    result = runner.invoke(cli, ["fetch", "https://example.com/a", "--verbose"])

    assert result.exit_code == 0
    assert "Resolving 1 identifier(s)..." in result.stderr


@pytest.mark.unit
def test_fetch_writes_audit_log(runner: CliRunner, served, tmp_path: Path) -> None:
    """Test --audit-log appends run and job events."""
    log_path = tmp_path / "audit" / "events.jsonl"

    result = runner.invoke(
        cli,
        ["fetch", "https://example.com/a", "nonsense", "--audit-log", str(log_path)],
    )

    assert result.exit_code == 0
    events = [json.loads(line) for line in log_path.read_text().splitlines()]
    kinds = [e["event"] for e in events]
    assert kinds[0] == "run_started"
    assert kinds[-1] == "run_finished"
    assert kinds.count("job_finished") == 2
    assert events[-1]["data"]["status"] == "partial"
    assert len({e["run_id"] for e in events}) == 1


# ---------------------------------------------------------------------------
# pull command
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_pull_not_implemented(runner: CliRunner) -> None:
    """Test pull reports it is not implemented and exits 1."""
    result = runner.invoke(cli, ["pull", "10.1000/182"])

    assert result.exit_code == 1
    assert "not implemented" in result.stderr
    assert result.stdout == ""
