"""Tests for the lf command line interface."""

import importlib
import json

import pytest
import yaml
from click.testing import CliRunner

from langfuse_cli import __version__
from langfuse_cli.api import Client, Transport
from langfuse_cli.cli import main

from conftest import HOST, FakeResponse, page

CREDENTIAL_ARGS = ["--host", HOST, "--public-key", "pk-lf-1234567890", "--secret-key", "sk-lf-abcdefghij"]


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def fake_api(monkeypatch, session, retry_policy):
    """Route every client the CLI builds through the scripted session"""
    built = []

    def make_client(credentials):
        transport = Transport(credentials, retry_policy=retry_policy, session=session, debug=False)
        client = Client(credentials, transport=transport)
        built.append(client)
        return client

    monkeypatch.setattr("langfuse_cli.cli.common.Client", make_client)
    # the commands package re-exports the config group under the module name
    config_module = importlib.import_module("langfuse_cli.cli.commands.config")
    monkeypatch.setattr(config_module, "Client", make_client)
    return built


def invoke(runner, *args):
    return runner.invoke(main, [*CREDENTIAL_ARGS, *args])


def test_version(runner):
    result = runner.invoke(main, ["version"])
    assert result.exit_code == 0
    assert result.output.strip() == f"lf-cli version {__version__}"


def test_help_lists_commands(runner):
    result = runner.invoke(main, ["--help"])
    assert result.exit_code == 0
    for command in ("traces", "sessions", "observations", "scores", "metrics", "config"):
        assert command in result.output


class TestTraces:
    def test_list_as_json(self, runner, session, fake_api):
        session.queue(page([{"id": "t1", "name": "chat"}], total_pages=1))

        result = invoke(runner, "-f", "json", "traces", "list", "--name", "chat", "--limit", "5")

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == [{"id": "t1", "name": "chat"}]
        assert session.calls[0]["params"] == {"name": "chat", "page": 1, "limit": 5}

    def test_list_filters_and_global_limit(self, runner, session, fake_api):
        session.queue(page([], total_pages=0))

        result = invoke(
            runner, "-l", "7", "traces", "list",
            "--from", "2024-01-01T00:00:00Z", "--user-id", "u1", "--tags", "a", "--tags", "b",
        )

        assert result.exit_code == 0, result.output
        assert "No data to display" in result.output
        assert session.calls[0]["params"] == {
            "userId": "u1",
            "tags": ["a", "b"],
            "fromTimestamp": "2024-01-01T00:00:00Z",
            "page": 1,
            "limit": 7,
        }

    def test_list_as_table(self, runner, session, fake_api):
        session.queue(page([{"id": "t1", "name": "chat"}], total_pages=1))

        result = invoke(runner, "traces", "list")

        assert result.exit_code == 0, result.output
        assert "t1" in result.output
        assert "chat" in result.output

    def test_get_not_found(self, runner, session, fake_api):
        session.queue(FakeResponse(404, {"message": "not found"}))

        result = invoke(runner, "traces", "get", "abc")

        assert result.exit_code == 1
        assert "Trace not found - abc" in result.output
        assert len(session.calls) == 1

    def test_authentication_error(self, runner, session, fake_api):
        session.queue(FakeResponse(401, {"message": "Invalid credentials"}))

        result = invoke(runner, "traces", "list")

        assert result.exit_code == 1
        assert "Authentication Error" in result.output


def test_missing_credentials(runner, session, fake_api):
    result = runner.invoke(main, ["traces", "list"])

    assert result.exit_code == 1
    assert "Missing required configuration: public_key, secret_key" in result.output
    assert session.calls == []


def test_host_without_scheme_is_reported(runner):
    result = runner.invoke(main, [
        "--host", "localhost:3000", "--public-key", "pk", "--secret-key", "sk",
        "traces", "get", "t1",
    ])

    assert result.exit_code == 1
    assert "Error: Request failed" in result.output
    assert result.exception is None or isinstance(result.exception, SystemExit)


def test_retried_request_prints_no_log_lines(runner, session, fake_api, sleeps):
    session.queue(FakeResponse(503), page([{"id": "t1"}], total_pages=1))

    result = invoke(runner, "-f", "json", "traces", "list")

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == [{"id": "t1"}]
    assert "Attempt" not in result.output
    assert sleeps == [0.5]


def test_verbose_shows_retries(runner, session, fake_api):
    session.queue(FakeResponse(503), page([{"id": "t1"}], total_pages=1))

    result = invoke(runner, "-v", "-f", "json", "traces", "list")

    assert result.exit_code == 0, result.output
    assert "Attempt 1/4 got HTTP 503" in result.output


def test_log_file_receives_records(runner, session, fake_api, tmp_path):
    log_path = tmp_path / "logs" / "lf.log"
    session.queue(FakeResponse(503), page([], total_pages=0))

    result = invoke(runner, "--log-file", str(log_path), "-f", "json", "traces", "list")

    assert result.exit_code == 0, result.output
    assert "Attempt" not in result.output
    records = [json.loads(line) for line in log_path.read_text(encoding="utf-8").splitlines()]
    assert any(r["message"] == "Attempt 1/4 got HTTP 503" for r in records)


def test_credentials_from_environment(runner, session, fake_api, monkeypatch):
    monkeypatch.setenv("LANGFUSE_PUBLIC_KEY", "pk-env")
    monkeypatch.setenv("LANGFUSE_SECRET_KEY", "sk-env")
    monkeypatch.setenv("LANGFUSE_HOST", HOST)
    session.queue(FakeResponse(200, {"id": "s1"}))

    result = runner.invoke(main, ["-f", "json", "sessions", "get", "s1"])

    assert result.exit_code == 0, result.output
    assert session.auth.username == "pk-env"
    assert session.calls[0]["url"] == f"{HOST}/api/public/sessions/s1"


class TestObservationsAndScores:
    def test_observations_list_with_type(self, runner, session, fake_api):
        session.queue(page([{"id": "o1"}], total_pages=1))

        result = invoke(runner, "-f", "json", "observations", "list", "--type", "span", "--trace-id", "t1")

        assert result.exit_code == 0, result.output
        assert session.calls[0]["params"]["type"] == "span"
        assert session.calls[0]["params"]["traceId"] == "t1"

    def test_observations_invalid_type_is_a_usage_error(self, runner, session, fake_api):
        result = invoke(runner, "observations", "list", "--type", "trace")
        assert result.exit_code == 2
        assert session.calls == []

    def test_score_not_found(self, runner, session, fake_api):
        session.queue(FakeResponse(404, {}))
        result = invoke(runner, "scores", "get", "sc9")
        assert result.exit_code == 1
        assert "Score not found - sc9" in result.output


class TestMetrics:
    def test_query(self, runner, session, fake_api):
        session.queue(FakeResponse(200, {"data": [{"name": "chat", "count_count": 2}]}))

        result = invoke(
            runner, "-f", "json", "metrics", "query",
            "--view", "traces", "--measure", "count", "--aggregation", "count",
            "--dimensions", "name,userId", "--granularity", "day",
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == [{"name": "chat", "count_count": 2}]
        body = session.calls[0]["json"]
        assert body["dimensions"] == [{"field": "name"}, {"field": "userId"}]
        assert body["timeDimension"] == {"granularity": "day"}
        assert body["limit"] == 100

    def test_invalid_view_sends_nothing(self, runner, session, fake_api):
        result = invoke(
            runner, "metrics", "query",
            "--view", "spans", "--measure", "count", "--aggregation", "count",
        )

        assert result.exit_code == 1
        assert "Invalid view 'spans'" in result.output
        assert session.calls == []


def test_csv_output_to_file(runner, session, fake_api, tmp_path):
    session.queue(page([{"id": "t1", "name": "chat"}], total_pages=1))
    target = tmp_path / "traces.csv"

    result = invoke(runner, "-f", "csv", "-o", str(target), "traces", "list")

    assert result.exit_code == 0, result.output
    assert target.read_text(encoding="utf-8") == "id,name\nt1,chat\n"
    assert "t1" not in result.output


class TestConfigCommands:
    def test_set_and_show_masks_keys(self, runner, tmp_path):
        result = runner.invoke(main, [
            "config", "set", "staging",
            "--public-key", "pk-lf-1234567890",
            "--secret-key", "sk-lf-abcdefghij",
        ])
        assert result.exit_code == 0, result.output

        data = yaml.safe_load((tmp_path / "config.yml").read_text(encoding="utf-8"))
        assert data["profiles"]["staging"]["secret_key"] == "sk-lf-abcdefghij"

        result = runner.invoke(main, ["config", "show", "staging"])
        assert result.exit_code == 0, result.output
        assert "pk-lf-12********" in result.output
        assert "sk-lf-ab********" in result.output
        assert "sk-lf-abcdefghij" not in result.output

    def test_list_without_file(self, runner):
        result = runner.invoke(main, ["config", "list"])
        assert result.exit_code == 0
        assert "No configuration file found" in result.output

    def test_list_profiles(self, runner):
        runner.invoke(main, ["config", "set", "a", "--public-key", "pk-aaaaaaaaaa", "--secret-key", "sk"])
        runner.invoke(main, ["config", "set", "b", "--public-key", "pk-bbbbbbbbbb", "--secret-key", "sk"])

        result = runner.invoke(main, ["config", "list"])

        assert result.exit_code == 0
        assert "a" in result.output and "b" in result.output
        assert "pk-aaaaa*****" in result.output

    def test_saved_profile_is_used(self, runner, session, fake_api):
        runner.invoke(main, ["config", "set", "team", "--public-key", "pk-team", "--secret-key", "sk-team", "--host", HOST])
        session.queue(page([], total_pages=0))

        result = runner.invoke(main, ["-P", "team", "-f", "json", "scores", "list"])

        assert result.exit_code == 0, result.output
        assert session.auth.username == "pk-team"

    def test_setup_non_interactive(self, runner, session, fake_api, monkeypatch, tmp_path):
        monkeypatch.setenv("LANGFUSE_PUBLIC_KEY", "pk-lf-setup")
        monkeypatch.setenv("LANGFUSE_SECRET_KEY", "sk-lf-setup")
        monkeypatch.setenv("LANGFUSE_HOST", HOST)
        session.queue(page([], total_pages=0))

        result = runner.invoke(main, ["config", "setup"])

        assert result.exit_code == 0, result.output
        assert "Success" in result.output
        assert session.calls[0]["timeout"] == (5, 5)
        data = yaml.safe_load((tmp_path / "config.yml").read_text(encoding="utf-8"))
        assert data["profiles"]["default"]["public_key"] == "pk-lf-setup"

    def test_setup_rejected_credentials_are_not_saved(self, runner, session, fake_api, monkeypatch, tmp_path):
        monkeypatch.setenv("LANGFUSE_PUBLIC_KEY", "pk-lf-bad")
        monkeypatch.setenv("LANGFUSE_SECRET_KEY", "sk-lf-bad")
        session.queue(FakeResponse(401, {"message": "Invalid credentials"}))

        result = runner.invoke(main, ["config", "setup"])

        assert result.exit_code == 1
        assert "Connection test failed" in result.output
        assert not (tmp_path / "config.yml").exists()
