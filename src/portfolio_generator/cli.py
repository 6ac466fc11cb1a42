from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path

from portfolio_generator.config import Settings, load_settings
from portfolio_generator.models import InvalidResumeError, ResumeFile
from portfolio_generator.rendering import render_portfolio
from portfolio_generator.services import GenerationClient, RequestStateMachine
from portfolio_generator.themes import list_themes, tokens_for
from portfolio_generator.utils import (
    display_failure,
    display_portfolio,
    prompt_for_resume_file,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="portfolio-generator",
        description="Upload your resume and let AI create a professional portfolio for you.",
    )
    parser.add_argument(
        "resume",
        nargs="?",
        type=Path,
        help="Path to a .pdf or .docx resume (a file dialog opens when omitted).",
    )
    parser.add_argument("--theme", choices=list_themes(), help="Theme for the portfolio view.")
    parser.add_argument("--endpoint", help="Generation service URL.")
    parser.add_argument("--tui", action="store_true", help="Launch the interactive TUI.")
    return parser


def run_cli(
    resume: Path | None,
    settings: Settings,
    client: GenerationClient | None = None,
) -> int:
    """Run the CLI workflow: select resume → submit → display portfolio.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    if client is None:
        with GenerationClient(settings.api_url, timeout=settings.timeout) as owned:
            return run_cli(resume, settings, owned)

    print("=" * 60)
    print("AI Portfolio Generator")
    print("=" * 60)

    machine = RequestStateMachine(theme=settings.theme)

    path = resume if resume is not None else prompt_for_resume_file()
    if path is not None:
        try:
            machine.select_file(ResumeFile.from_path(path))
        except InvalidResumeError as exc:
            display_failure(f"Error: {exc}")
            return 1
        print(f"\n📄 Selected: {path.name}")

    pending = machine.submit()
    if pending is None:
        display_failure(machine.state.error_message or "Nothing to submit.")
        return 1

    print("\n⏳ Generating your portfolio, please wait...")
    machine.perform(pending, client)

    state = machine.state
    if state.error_message is not None:
        display_failure(state.error_message)
        return 1

    view = render_portfolio(state.document, tokens_for(state.active_theme))
    if view is not None:
        display_portfolio(view)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the CLI application."""
    args = build_parser().parse_args(argv)
    settings = load_settings()
    if args.theme:
        settings = replace(settings, theme=args.theme)
    if args.endpoint:
        settings = replace(settings, api_url=args.endpoint)

    if args.tui:
        from portfolio_generator.tui import PortfolioTUI

        PortfolioTUI(settings).run()
        return 0

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return run_cli(args.resume, settings)
    except KeyboardInterrupt:
        print("\n\n⚠️  Interrupted by user. Exiting.")
        return 130
    except Exception as exc:
        logger.exception("Unexpected error")
        print(f"\n❌ Unexpected error: {exc}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
