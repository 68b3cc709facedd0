"""Tests for the keyboard handlers."""

import io
import sys
from unittest.mock import MagicMock, patch

from focusflow.ui.keyboard import KeyboardHandler, get_keyboard_handler


def test_non_terminal_stdin_yields_no_keys():
    with patch.object(sys, "stdin", io.StringIO("q")):
        handler = KeyboardHandler()
        assert handler.old_settings is None
        assert handler.get_key() is None
        handler.stop()


def test_get_key_lowercases():
    handler = KeyboardHandler.__new__(KeyboardHandler)
    handler.fd = 0
    handler.old_settings = ["saved"]
    stdin = MagicMock()
    stdin.read.return_value = "Q"

    with patch.object(sys, "stdin", stdin):
        with patch("select.select", return_value=([stdin], [], [])):
            assert handler.get_key() == "q"


def test_get_key_without_input():
    handler = KeyboardHandler.__new__(KeyboardHandler)
    handler.fd = 0
    handler.old_settings = ["saved"]

    with patch("select.select", return_value=([], [], [])):
        assert handler.get_key() is None


def test_platform_selection():
    with patch.object(sys, "stdin", io.StringIO()):
        with patch("focusflow.ui.keyboard.sys.platform", "linux"):
            assert isinstance(get_keyboard_handler(), KeyboardHandler)
