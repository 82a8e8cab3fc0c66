"""Tests for terminfo name validation."""

import pytest

from tiresolve.domain.names import validate_name


class TestValidateName:
    @pytest.mark.parametrize("name", ["xterm", "xterm-256color", "screen.xterm", "9term", "X"])
    def test_valid(self, name: str) -> None:
        assert validate_name(name) is None

    def test_empty(self) -> None:
        assert "empty" in (validate_name("") or "")

    def test_leading_dot(self) -> None:
        assert "'.'" in (validate_name(".hidden") or "")

    @pytest.mark.parametrize("name", ["../etc/passwd", "x/xterm", "xterm/"])
    def test_separator(self, name: str) -> None:
        assert "separator" in (validate_name(name) or "")

    def test_nul_byte(self) -> None:
        assert "NUL" in (validate_name("xt\0erm") or "")
