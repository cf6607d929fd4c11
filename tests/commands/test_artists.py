"""Tests for the artist command group."""

from __future__ import annotations

import json
from typing import Any

import pytest
from click.testing import CliRunner

from musdis.cli import cli


def _json(cli_runner: CliRunner, *args: str, **kwargs: Any) -> dict[str, Any]:
    result = cli_runner.invoke(cli, ["--json", *args], **kwargs)
    assert result.exit_code == 0, result.output
    return json.loads(result.output)["data"]


def _user_id(cli_runner: CliRunner, name: str = "alice") -> str:
    user = _json(
        cli_runner, "user", "sign-up", name, f"{name}@example.com", "--password", "s3cretpass"
    )
    return user["id"]


_QUEEN = json.dumps(
    {"name": "Queen", "artist_type_slug": "band", "cover_url": "https://img.example.com/q.jpg"}
)


@pytest.mark.usefixtures("_isolated_data_root")
class TestArtistCommands:
    def test_create_show_list(self, cli_runner: CliRunner) -> None:
        user_id = _user_id(cli_runner)
        artist = _json(cli_runner, "artist", "create", _QUEEN, "--as", user_id)
        assert artist["slug"] == "queen"
        assert artist["creator_user_id"] == user_id

        shown = _json(cli_runner, "artist", "show", "queen")
        assert shown == artist
        listed = _json(cli_runner, "artist", "list")
        assert [a["slug"] for a in listed] == ["queen"]

    def test_create_from_stdin(self, cli_runner: CliRunner) -> None:
        user_id = _user_id(cli_runner)
        artist = _json(cli_runner, "artist", "create", "-", "--as", user_id, input=_QUEEN)
        assert artist["name"] == "Queen"

    def test_create_requires_as(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["artist", "create", _QUEEN])
        assert result.exit_code == 2

    def test_unknown_user(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["artist", "create", _QUEEN, "--as", "ghost"])
        assert result.exit_code == 1
        assert "ERROR create_artist 404" in result.output
        assert "User with Id = ghost is not found." in result.output

    def test_invalid_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["artist", "create", "{not json", "--as", "u1"])
        assert result.exit_code == 1
        assert "Request body is not valid JSON." in result.output

    def test_malformed_body(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "artist", "create", '{"name": "Queen"}', "--as", "u1"]
        )
        assert result.exit_code == 1
        problem = json.loads(result.output)["problem"]
        assert problem["detail"] == "Request body is malformed."
        assert problem["errors"] == [
            "artist_type_slug: Field required",
            "cover_url: Field required",
        ]

    def test_update_and_delete_by_owner(self, cli_runner: CliRunner) -> None:
        user_id = _user_id(cli_runner)
        artist = _json(cli_runner, "artist", "create", _QUEEN, "--as", user_id)

        updated = _json(
            cli_runner, "artist", "update", artist["id"], '{"name": "Queen II"}', "--as", user_id
        )
        assert updated["slug"] == "queen-ii"

        deleted = cli_runner.invoke(cli, ["artist", "delete", artist["id"], "--as", user_id])
        assert deleted.exit_code == 0, deleted.output
        assert "OK delete_artist" in deleted.output

    def test_update_by_other_user_forbidden(self, cli_runner: CliRunner) -> None:
        owner = _user_id(cli_runner, "alice")
        other = _user_id(cli_runner, "bob")
        artist = _json(cli_runner, "artist", "create", _QUEEN, "--as", owner)
        result = cli_runner.invoke(
            cli, ["artist", "update", artist["id"], '{"name": "X"}', "--as", other]
        )
        assert result.exit_code == 1
        assert "ERROR update_artist 403" in result.output

    def test_delete_missing(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["artist", "delete", "a404", "--as", "u1"])
        assert result.exit_code == 1
        assert "Cannot delete artist, content with Id=a404 not found." in result.output
