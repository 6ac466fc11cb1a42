from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from rich.console import Group, RenderableType
from rich.padding import Padding
from rich.text import Text
from textual import on
from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal, VerticalScroll
from textual.widgets import Button, Footer, Header, Label, Static
from textual.worker import Worker, WorkerState

from portfolio_generator.config import Settings, load_settings
from portfolio_generator.models import (
    FileSelected,
    InvalidResumeError,
    Phase,
    PortfolioDocument,
    ResumeFile,
    UploadState,
)
from portfolio_generator.rendering import PortfolioView, render_portfolio
from portfolio_generator.services import (
    GenerationClient,
    RequestStateMachine,
    TransportError,
)
from portfolio_generator.themes import ThemeTokens, list_themes, theme_label, tokens_for
from portfolio_generator.utils import prompt_for_resume_file

logger = logging.getLogger(__name__)

GENERATING_MESSAGE = "Generating your portfolio, please wait..."

# Shadow weight -> Textual border type for the main card.
_SHADOW_BORDERS = {"md": "round", "lg": "heavy", "xl": "double"}


def status_message(state: UploadState) -> str:
    """Return the status line for *state*."""
    if state.phase is Phase.SUBMITTING:
        return GENERATING_MESSAGE
    if state.error_message is not None:
        return state.error_message
    if state.phase is Phase.SUCCEEDED:
        return "Portfolio generated."
    if state.selected_file is not None:
        return f"Selected: {state.selected_file.filename}"
    return "Upload your resume and let AI create a professional portfolio for you."


def portfolio_renderable(view: PortfolioView | None) -> RenderableType:
    """Build a Rich renderable for the portfolio pane."""
    if view is None:
        return Text("")

    blocks: list[RenderableType] = [
        Text(view.name.text, style=f"bold {view.name.color}", justify="center"),
        Text(view.title.text, style=view.title.color, justify="center"),
    ]

    for section in view.sections:
        blocks.append(Text(""))
        blocks.append(Text(section.title.text, style=f"bold underline {section.title.color}"))
        if section.text is not None:
            blocks.append(Text(section.text.text, style=section.text.color))
        if section.items:
            chips = Text()
            for index, item in enumerate(section.items):
                if index:
                    chips.append("  ")
                chips.append(f" {item.text} ", style=f"{item.color} on {view.tokens.background}")
            blocks.append(chips)
        for entry in section.entries:
            lines: list[RenderableType] = [
                Text(entry.heading.text, style=f"bold {entry.heading.color}")
            ]
            if entry.subheading is not None:
                lines.append(Text(entry.subheading.text, style=f"italic {entry.subheading.color}"))
            if entry.body is not None:
                lines.append(Text(entry.body.text, style=entry.body.color))
            for bullet in entry.bullets:
                lines.append(Text(f"• {bullet.text}", style=bullet.color))
            if entry.footer is not None:
                lines.append(Text(entry.footer.text, style=entry.footer.color))
            blocks.append(Padding(Group(*lines), (1, 0, 0, 2)))

    return Group(*blocks)


class PortfolioTUI(App[None]):
    """Textual front end for the portfolio generator."""

    TITLE = "AI Portfolio Generator"

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("o", "select_file", "Select resume"),
        ("g", "generate", "Generate"),
    ]

    CSS = """
Screen {
    layout: vertical;
    align-horizontal: center;
}

#card {
    width: 100;
    height: 1fr;
    padding: 1 2;
    border: heavy $primary;
}

#title {
    text-align: center;
    text-style: bold;
}

#subtitle {
    text-align: center;
    margin-bottom: 1;
}

#theme-bar, #form {
    height: auto;
    align-horizontal: center;
    margin-bottom: 1;
}

#theme-bar Button, #form Button {
    margin: 0 1;
}

#file-label {
    padding: 0 2;
    height: 3;
    content-align: center middle;
    border: round $primary;
}

#status {
    width: 100%;
    text-align: center;
    margin-bottom: 1;
}

#portfolio {
    height: 1fr;
}
"""

    def __init__(
        self,
        settings: Settings | None = None,
        client: GenerationClient | None = None,
        file_picker: Callable[[], Path | None] = prompt_for_resume_file,
    ) -> None:
        super().__init__()
        self._app_settings = settings or load_settings()
        self._owns_client = client is None
        self._generation_client = client or GenerationClient(
            self._app_settings.api_url, timeout=self._app_settings.timeout
        )
        self._file_picker = file_picker
        self._request_machine = RequestStateMachine(theme=self._app_settings.theme)
        self._worker_requests: dict[Worker, int] = {}

    @property
    def machine(self) -> RequestStateMachine:
        return self._request_machine

    def compose(self) -> ComposeResult:
        yield Header()
        yield Container(
            Static("AI Portfolio Generator", id="title"),
            Static(
                "Upload your resume and let AI create a professional portfolio for you.",
                id="subtitle",
            ),
            Horizontal(
                *(
                    Button(theme_label(t), id=f"theme-{t}", classes="theme-button")
                    for t in list_themes()
                ),
                id="theme-bar",
            ),
            Horizontal(
                Label("No file selected", id="file-label"),
                Button("Select Resume", id="btn-select", variant="default"),
                Button("Generate Portfolio", id="btn-generate", variant="primary"),
                id="form",
            ),
            Label("", id="status"),
            VerticalScroll(Static("", id="portfolio-body"), id="portfolio"),
            id="card",
        )
        yield Footer()

    def on_mount(self) -> None:
        self._request_machine.subscribe(self._refresh)
        self._refresh(self._request_machine.state)

    def on_unmount(self) -> None:
        if self._owns_client:
            self._generation_client.close()

    # ---------------------------------------------------------------------
    # EVENTS
    # ---------------------------------------------------------------------

    @on(Button.Pressed, ".theme-button")
    def handle_theme_button(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        self._request_machine.change_theme(button_id.removeprefix("theme-"))

    @on(Button.Pressed, "#btn-select")
    def handle_select_button(self) -> None:
        self.action_select_file()

    @on(Button.Pressed, "#btn-generate")
    def handle_generate_button(self) -> None:
        self.action_generate()

    def action_select_file(self) -> None:
        """Open the file dialog and record the chosen resume."""
        status = self.query_one("#status", Label)
        try:
            selected = self._file_picker()
        except Exception as exc:  # pragma: no cover - dialog backend failure
            logger.exception("File dialog failed")
            status.update(f"Error: {exc}")
            return

        if selected is None:
            status.update("No file selected.")
            return

        try:
            resume = ResumeFile.from_path(selected)
        except InvalidResumeError as exc:
            status.update(f"Error: {exc}")
            return

        self._request_machine.select_file(resume)

    def action_generate(self) -> None:
        """Submit the selected resume on a background worker."""
        pending = self._request_machine.submit()
        if pending is None:
            return

        client = self._generation_client

        def work() -> PortfolioDocument:
            return client.generate(pending.file)

        worker = self.run_worker(
            work,
            name=f"generate-{pending.request_id}",
            thread=True,
            exit_on_error=False,
        )
        self._worker_requests[worker] = pending.request_id

    # ---------------------------------------------------------------------
    # WORKER STATE HANDLER
    # ---------------------------------------------------------------------

    @on(Worker.StateChanged)
    def worker_state(self, event: Worker.StateChanged) -> None:
        request_id = self._worker_requests.get(event.worker)
        if request_id is None:
            return

        if event.state == WorkerState.SUCCESS:
            del self._worker_requests[event.worker]
            self._request_machine.complete(request_id, event.worker.result)
        elif event.state == WorkerState.ERROR:
            del self._worker_requests[event.worker]
            self._request_machine.fail(request_id, event.worker.error)
        elif event.state == WorkerState.CANCELLED:
            del self._worker_requests[event.worker]
            self._request_machine.fail(request_id, TransportError("Request aborted"))

    # ---------------------------------------------------------------------
    # RENDERING
    # ---------------------------------------------------------------------

    def _refresh(self, state: UploadState) -> None:
        tokens = tokens_for(state.active_theme)

        generate_btn = self.query_one("#btn-generate", Button)
        generate_btn.disabled = state.is_submitting
        generate_btn.label = "Generating..." if state.is_submitting else "Generate Portfolio"

        file_label = self.query_one("#file-label", Label)
        if state.selected_file is not None:
            file_label.update(state.selected_file.filename)
        else:
            file_label.update("No file selected")

        status = self.query_one("#status", Label)
        status.update(status_message(state))
        if state.error_message is not None:
            status.styles.color = "red"
        elif isinstance(state.request, FileSelected):
            status.styles.color = tokens.text
        else:
            status.styles.color = tokens.accent

        for theme_id in list_themes():
            button = self.query_one(f"#theme-{theme_id}", Button)
            button.variant = "primary" if theme_id == state.active_theme else "default"

        self._apply_theme(tokens)

        view = render_portfolio(state.document, tokens)
        self.query_one("#portfolio-body", Static).update(portfolio_renderable(view))

    def _apply_theme(self, tokens: ThemeTokens) -> None:
        self.screen.styles.background = tokens.background
        card = self.query_one("#card", Container)
        card.styles.background = tokens.card_background
        card.styles.color = tokens.text
        card.styles.border = (_SHADOW_BORDERS.get(tokens.shadow, "heavy"), tokens.accent)
        self.query_one("#title", Static).styles.color = tokens.accent
        self.query_one("#file-label", Label).styles.border = ("round", tokens.input_border)


def main() -> None:
    PortfolioTUI().run()
