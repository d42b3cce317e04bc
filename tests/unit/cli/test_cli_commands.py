"""
Unit tests for the productive CLI.

Commands run through typer's CliRunner against a mocked ProductiveApi.
"""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from src.cli.commands.common import parse_filters
from src.cli.commands.config import mask_secret
from src.cli.main import app

runner = CliRunner()


@pytest.fixture
def cli_env(monkeypatch, api):
    """Credentials in the environment and the API client replaced by the mock."""
    monkeypatch.setenv("PRODUCTIVE_API_TOKEN", "test-token-123456")
    monkeypatch.setenv("PRODUCTIVE_ORG_ID", "42")
    monkeypatch.setattr("src.cli.session.create_api", lambda config: api)
    return api


class TestHelpers:
    """Tests for option parsing helpers."""

    def test_parse_filters(self):
        assert parse_filters(["after=2024-01-01", " status = 1 "]) == {
            "after": "2024-01-01",
            "status": "1",
        }

    def test_parse_filters_rejects_missing_separator(self):
        import typer

        with pytest.raises(typer.BadParameter):
            parse_filters(["after"])

    def test_mask_secret(self):
        assert mask_secret(None) is None
        assert mask_secret("short") == "****"
        assert mask_secret("abcdefghijkl") == "abcd…ijkl"


class TestListCommands:
    """Tests for list commands."""

    def test_people_list_json(self, cli_env, make_response):
        cli_env.get_people.return_value = make_response(
            "people",
            {"id": 7, "first_name": "Jane", "last_name": "Doe", "email": "jane@example.com"},
            meta={"current_page": 1, "total_pages": 1, "total_count": 1},
        )

        result = runner.invoke(app, ["--format", "json", "people", "list"])

        assert result.exit_code == 0, result.output
        body = json.loads(result.output)
        assert body["data"][0]["email"] == "jane@example.com"
        assert body["meta"]["total_count"] == 1
        cli_env.close.assert_awaited_once()

    def test_time_list_resolves_person(self, cli_env, make_response):
        cli_env.get_people.return_value = make_response(
            "people", {"id": 7, "first_name": "Jane", "last_name": "Doe"}
        )

        result = runner.invoke(
            app,
            ["--format", "json", "time", "list", "--person", "jane@example.com", "--size", "5"],
        )

        assert result.exit_code == 0, result.output
        kwargs = cli_env.get_time_entries.await_args.kwargs
        assert kwargs["filter"] == {"person_id": "7"}
        assert kwargs["per_page"] == 5
        assert json.loads(result.output)["resolved"]["person_id"]["id"] == "7"

    def test_bookings_list(self, cli_env, make_response):
        cli_env.get_companies.return_value = make_response("companies", {"id": 3, "name": "Acme"})
        cli_env.get_bookings.return_value = make_response(
            "bookings", {"id": 1, "started_on": "2024-06-03", "ended_on": "2024-06-07"}
        )

        args = ["--person", "500", "--company", "Acme", "--after", "2024-06-01", "--no-draft"]

        result = runner.invoke(app, ["--format", "json", "bookings", "list", *args])

        assert result.exit_code == 0, result.output
        assert cli_env.get_bookings.await_args.kwargs["filter"] == {
            "person_id": "500",
            "company_id": "3",
            "after": "2024-06-01",
            "draft": "false",
        }
        body = json.loads(result.output)
        assert body["data"][0]["started_on"] == "2024-06-03"
        assert body["resolved"]["company_id"]["label"] == "Acme"

    def test_raw_filters_passed_through(self, cli_env):
        result = runner.invoke(app, ["projects", "list", "--filter", "status=1"])

        assert result.exit_code == 0, result.output
        assert cli_env.get_projects.await_args.kwargs["filter"]["status"] == "1"
        assert "No results" in result.output

    def test_csv_output(self, cli_env, make_response):
        cli_env.get_companies.return_value = make_response(
            "companies", {"id": 3, "name": "Acme"}
        )

        result = runner.invoke(app, ["--format", "csv", "companies", "list"])

        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert lines[0].startswith("id,name")
        assert lines[1].startswith("3,Acme")


class TestErrors:
    """Tests for user-facing errors and exit codes."""

    def test_missing_credentials(self, monkeypatch):
        result = runner.invoke(app, ["people", "list"])

        assert result.exit_code == 1
        assert "API token not configured" in result.output

    def test_resolve_not_found(self, cli_env):
        result = runner.invoke(app, ["people", "get", "ghost@example.com"])

        assert result.exit_code == 1
        assert "Could not find person" in result.output
        cli_env.get_person.assert_not_awaited()

    def test_strict_ambiguous_lists_suggestions(self, cli_env, make_response):
        cli_env.get_people.return_value = make_response(
            "people",
            {"id": 7, "first_name": "Jane", "last_name": "Doe"},
            {"id": 8, "first_name": "Jane", "last_name": "Roe"},
        )

        result = runner.invoke(app, ["--strict", "time", "list", "--person", "Jane"])

        assert result.exit_code == 1
        assert "Did you mean" in result.output
        assert "Jane Roe (8)" in result.output
        cli_env.get_time_entries.assert_not_awaited()

    def test_validation_error(self, cli_env):
        result = runner.invoke(app, ["tasks", "update", "12"])

        assert result.exit_code == 1
        assert "No updates specified" in result.output
        cli_env.update_task.assert_not_awaited()


class TestResolveCommand:
    """Tests for the resolve command."""

    def test_quiet_prints_ids(self, cli_env, make_response):
        cli_env.get_projects.return_value = make_response(
            "projects", {"id": 12, "name": "Website", "project_number": "PRJ-123"}
        )

        result = runner.invoke(app, ["resolve", "PRJ-123", "--quiet"])

        assert result.exit_code == 0, result.output
        assert result.output.strip() == "12"
        assert cli_env.get_projects.await_args.kwargs["filter"] == {"project_number": "PRJ-123"}

    def test_numeric_id_echoed(self, cli_env):
        result = runner.invoke(app, ["resolve", "12345", "--quiet"])

        assert result.exit_code == 0, result.output
        assert result.output.strip() == "12345"
        cli_env.get_projects.assert_not_called()
        cli_env.get_people.assert_not_called()

    def test_undetectable_type(self, cli_env):
        result = runner.invoke(app, ["resolve", "Website"])

        assert result.exit_code == 1
        assert "Cannot determine resource type" in result.output

    def test_explicit_type(self, cli_env, make_response):
        cli_env.get_companies.return_value = make_response(
            "companies", {"id": 3, "name": "Acme"}, {"id": 4, "name": "Acme Labs"}
        )

        result = runner.invoke(
            app, ["--format", "json", "resolve", "Acme", "--type", "company", "--first"]
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["data"] == [{"id": "3", "label": "Acme", "exact": True}]


class TestNoResolve:
    def test_identifiers_passed_through(self, cli_env, make_response):
        cli_env.get_person.return_value = make_response("people", {"id": 7, "first_name": "Jane"})

        result = runner.invoke(app, ["--no-resolve", "people", "get", "jane@example.com"])

        assert result.exit_code == 0, result.output
        cli_env.get_person.assert_awaited_once_with("jane@example.com")
        cli_env.get_people.assert_not_awaited()


class TestConfigCommand:
    def test_show_masks_token(self, monkeypatch):
        monkeypatch.setenv("PRODUCTIVE_API_TOKEN", "secret-token-abcdef")
        monkeypatch.setenv("PRODUCTIVE_ORG_ID", "42")

        result = runner.invoke(app, ["--format", "json", "--user-id", "500", "config", "show"])

        assert result.exit_code == 0, result.output
        values = json.loads(result.output)
        assert values["api_token"] == "secr…cdef"
        assert values["org_id"] == "42"
        assert values["user_id"] == "500"
        assert "secret-token-abcdef" not in result.output

    def test_version(self):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert "0.1.0" in result.output
