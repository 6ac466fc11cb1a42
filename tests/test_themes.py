from __future__ import annotations

from dataclasses import fields

import pytest

from portfolio_generator.themes import (
    DEFAULT_THEME,
    ThemeTokens,
    list_themes,
    theme_label,
    tokens_for,
)


def test_list_themes_order_is_stable() -> None:
    assert list_themes() == ["modern", "minimal", "colorful"]
    assert list_themes() == list_themes()


def test_default_theme_is_registered() -> None:
    assert DEFAULT_THEME in list_themes()


@pytest.mark.parametrize("theme_id", ["modern", "minimal", "colorful"])
def test_tokens_for_returns_complete_token_set(theme_id: str) -> None:
    tokens = tokens_for(theme_id)

    assert isinstance(tokens, ThemeTokens)
    for f in fields(ThemeTokens):
        value = getattr(tokens, f.name)
        assert isinstance(value, str)
        assert value


def test_tokens_are_immutable() -> None:
    tokens = tokens_for("modern")
    with pytest.raises(AttributeError):
        tokens.accent = "#000000"  # type: ignore[misc]


def test_tokens_for_unknown_theme_raises() -> None:
    with pytest.raises(ValueError, match="Unknown theme 'neon'"):
        tokens_for("neon")


def test_theme_label_capitalises() -> None:
    assert theme_label("modern") == "Modern"
    assert theme_label("colorful") == "Colorful"
