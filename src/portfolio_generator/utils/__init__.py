"""Utility functions and helpers"""

from portfolio_generator.utils.display import (
    display_failure,
    display_portfolio,
    prompt_for_resume_file,
)

__all__ = [
    "display_failure",
    "display_portfolio",
    "prompt_for_resume_file",
]
