"""Tests for the user command group."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from musdis.cli import cli


@pytest.mark.usefixtures("_isolated_data_root")
class TestUserCommands:
    def test_sign_up_and_show(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli,
            ["--json", "user", "sign-up", "alice", "alice@example.com", "--password", "s3cretpass"],
        )
        assert result.exit_code == 0, result.output
        user = json.loads(result.output)["data"]
        assert user["user_name"] == "alice"
        assert "password" not in user

        shown = cli_runner.invoke(cli, ["user", "show", user["id"]])
        assert shown.exit_code == 0, shown.output
        assert "OK get_user_info" in shown.output
        assert "alice@example.com" in shown.output

    def test_password_prompt(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli,
            ["user", "sign-up", "alice", "alice@example.com"],
            input="s3cretpass\ns3cretpass\n",
        )
        assert result.exit_code == 0, result.output
        assert "OK sign_up" in result.output

    def test_invalid_sign_up(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["user", "sign-up", "al", "alice@example.com", "--password", "s3cretpass"]
        )
        assert result.exit_code == 1
        assert "ERROR sign_up 400 One or more validation errors occurred." in result.output
        assert "Cannot sign up, incorrect data!" in result.output

    def test_duplicate_sign_up_json(self, cli_runner: CliRunner) -> None:
        args = ["--json", "user", "sign-up", "alice", "a@example.com", "--password", "s3cretpass"]
        assert cli_runner.invoke(cli, args).exit_code == 0
        result = cli_runner.invoke(cli, args)
        assert result.exit_code == 1
        problem = json.loads(result.output)["problem"]
        assert problem["status"] == 409
        assert problem["detail"] == "UserName is already taken."

    def test_show_missing(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["user", "show", "nobody"])
        assert result.exit_code == 1
        assert "User with Id = nobody is not found." in result.output
