"""Tests for the task commands."""

import json
from unittest.mock import patch

import httpx
from typer.testing import CliRunner

from focusflow.api.client import APIClient
from focusflow.commands.tasks import app

runner = CliRunner()

TASKS = [
    {"id": 1, "content": "Write report", "is_completed": False},
    {"id": 2, "content": "Email Bob", "is_completed": True},
]


def _patch_client(config_service, handler):
    client = APIClient(config_service=config_service, transport=httpx.MockTransport(handler))
    return patch("focusflow.commands.tasks.get_client", return_value=client)


def test_list_requires_login(tmp_config):
    result = runner.invoke(app, ["list"])
    assert result.exit_code == 3


def test_list_pending_json(signed_in):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=TASKS)

    with _patch_client(signed_in, handler):
        result = runner.invoke(app, ["list", "-o", "json"])

    assert result.exit_code == 0
    assert json.loads(result.output) == [{"id": 1, "content": "Write report", "done": False}]


def test_list_all_table(signed_in):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=TASKS)

    with _patch_client(signed_in, handler):
        result = runner.invoke(app, ["list", "--all"])

    assert result.exit_code == 0
    assert "Email Bob" in result.output


def test_complete(signed_in):
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        return httpx.Response(
            200, json=[{"id": 1, "content": "Write report", "is_completed": body["is_completed"]}]
        )

    with _patch_client(signed_in, handler):
        result = runner.invoke(app, ["complete", "1"])

    assert result.exit_code == 0
    assert "completed" in result.output


def test_complete_unknown_task(signed_in):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[])

    with _patch_client(signed_in, handler):
        result = runner.invoke(app, ["complete", "99", "--undo"])

    assert result.exit_code == 4
    assert "not found" in result.output


def test_list_uses_configured_output_format(signed_in):
    signed_in.set("output.format", "json")

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=TASKS[:1])

    with _patch_client(signed_in, handler):
        result = runner.invoke(app, ["list"])

    assert result.exit_code == 0
    assert json.loads(result.output)[0]["content"] == "Write report"
