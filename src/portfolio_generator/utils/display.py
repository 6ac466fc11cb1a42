"""Display and file-selection utilities"""

from __future__ import annotations

from pathlib import Path

import easygui as eg

from portfolio_generator.models.request_state import ACCEPTED_EXTENSIONS
from portfolio_generator.rendering import PortfolioView, render_portfolio_markdown


def prompt_for_resume_file() -> Path | None:
    """Display file picker dialog for resume selection.

    Returns:
        Path to the selected resume, or None if cancelled.
    """
    patterns = [f"*{ext}" for ext in ACCEPTED_EXTENSIONS]
    path_str = eg.fileopenbox(
        msg="Select your resume (.pdf or .docx)",
        title="Select Resume",
        default=patterns[0],
        filetypes=[[*patterns, "Resume files"]],
    )
    return Path(path_str) if path_str else None


def display_portfolio(view: PortfolioView) -> None:
    """Print the generated portfolio as markdown."""
    print("\n✅ Portfolio generated:")
    print("=" * 60)
    print(render_portfolio_markdown(view))
    print("=" * 60)


def display_failure(message: str) -> None:
    print(f"\n❌ {message}")
