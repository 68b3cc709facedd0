"""Tests for the config management commands."""

import json

from typer.testing import CliRunner

from focusflow.commands.config import app

runner = CliRunner()


class TestHelpFlags:
    def test_app_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0

    def test_set_help(self):
        result = runner.invoke(app, ["set", "--help"])
        assert result.exit_code == 0


def test_view_masks_anon_key(tmp_config):
    tmp_config.set("backend.anon_key", "eyJhbGciOiJIUzI1NiJ9.secret")

    result = runner.invoke(app, ["view", "-o", "json"])

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["backend"]["anon_key"] == "eyJhbG…"
    assert data["cache"]["ttl"] == 300


def test_get(tmp_config):
    result = runner.invoke(app, ["get", "backend.url"])
    assert result.exit_code == 0
    assert "https://focusflow.supabase.co" in result.output


def test_get_unknown_key(tmp_config):
    result = runner.invoke(app, ["get", "backend.nope"])
    assert result.exit_code == 2


def test_set_parses_numbers_and_booleans(tmp_config):
    assert runner.invoke(app, ["set", "backend.timeout", "60"]).exit_code == 0
    assert runner.invoke(app, ["set", "output.bell", "false"]).exit_code == 0

    assert tmp_config.config.backend.timeout == 60
    assert tmp_config.config.output.bell is False


def test_set_unknown_key(tmp_config):
    result = runner.invoke(app, ["set", "backend.nope", "1"])
    assert result.exit_code == 2
    assert "not found" in result.output


def test_set_invalid_value(tmp_config):
    result = runner.invoke(app, ["set", "backend.timeout", "0"])
    assert result.exit_code == 2
    assert "Invalid value" in result.output
    assert tmp_config.config.backend.timeout == 30


def test_reset_single_key(tmp_config):
    tmp_config.set("cache.ttl", 10)

    result = runner.invoke(app, ["reset", "cache.ttl", "--yes"])

    assert result.exit_code == 0
    assert tmp_config.config.cache.ttl == 300


def test_reset_cancelled(tmp_config):
    tmp_config.set("cache.ttl", 10)

    result = runner.invoke(app, ["reset"], input="n\n")

    assert result.exit_code == 0
    assert tmp_config.config.cache.ttl == 10


def test_set_non_ascii_digit_is_rejected_cleanly(tmp_config):
    result = runner.invoke(app, ["set", "backend.timeout", "²"])
    assert result.exit_code == 2
    assert "Invalid value" in result.output
    assert tmp_config.config.backend.timeout == 30
