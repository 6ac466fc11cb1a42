"""Theme registry for the portfolio views."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "DEFAULT_THEME",
    "ThemeTokens",
    "list_themes",
    "theme_label",
    "tokens_for",
]

DEFAULT_THEME = "modern"


@dataclass(frozen=True, slots=True)
class ThemeTokens:
    """Named style attributes for one theme.

    Attributes:
        background: Screen background colour.
        text: Body text colour.
        card_background: Background of the main card.
        shadow: Shadow weight (``md``, ``lg`` or ``xl``).
        accent: Colour for headings and highlights.
        input_border: Border colour of the file input.
    """

    background: str
    text: str
    card_background: str
    shadow: str
    accent: str
    input_border: str


# Declaration order is the order shown in the theme selector.
_REGISTRY: dict[str, ThemeTokens] = {
    "modern": ThemeTokens(
        background="#f3f4f6",
        text="#1f2937",
        card_background="#ffffff",
        shadow="lg",
        accent="#2563eb",
        input_border="#d1d5db",
    ),
    "minimal": ThemeTokens(
        background="#ffffff",
        text="#111827",
        card_background="#f9fafb",
        shadow="md",
        accent="#16a34a",
        input_border="#e5e7eb",
    ),
    "colorful": ThemeTokens(
        background="#eef2ff",
        text="#312e81",
        card_background="#ffffff",
        shadow="xl",
        accent="#db2777",
        input_border="#c7d2fe",
    ),
}


def tokens_for(theme_id: str) -> ThemeTokens:
    """Return the token set registered under *theme_id*.

    Raises:
        ValueError: If no theme with that id exists.
    """
    try:
        return _REGISTRY[theme_id]
    except KeyError:
        available = ", ".join(_REGISTRY)
        msg = f"Unknown theme {theme_id!r}. Available: {available}"
        raise ValueError(msg) from None


def list_themes() -> list[str]:
    """Return all theme ids in selector order."""
    return list(_REGISTRY)


def theme_label(theme_id: str) -> str:
    """Return the button label for a theme id, e.g. ``Modern``."""
    return theme_id[:1].upper() + theme_id[1:]
