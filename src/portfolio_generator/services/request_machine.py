"""Lifecycle of a resume submission to the generation service.

``RequestStateMachine`` owns the single ``UploadState`` and is the only code
that mutates it. The network call itself is performed by the caller (the CLI
directly, the TUI on a worker thread) between ``submit`` and
``complete``/``fail`` so the machine never blocks and never runs two
transitions at once.

Every submission gets a monotonically increasing request id. An outcome is
applied only when its id is the latest one issued, so a slow response from an
earlier submission cannot overwrite a newer result.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from portfolio_generator.models.portfolio import PortfolioDocument
from portfolio_generator.models.request_state import (
    Failed,
    FailureKind,
    FileSelected,
    PendingRequest,
    ResumeFile,
    Submitting,
    Succeeded,
    UploadState,
)
from portfolio_generator.services.generation_client import (
    GenerationClient,
    GenerationError,
    ServerError,
)
from portfolio_generator.themes import DEFAULT_THEME, tokens_for

logger = logging.getLogger(__name__)

NO_FILE_MESSAGE = "Please select a file."

StateListener = Callable[[UploadState], None]


class RequestStateMachine:
    """Explicit state machine for one resume upload at a time."""

    def __init__(self, theme: str = DEFAULT_THEME) -> None:
        tokens_for(theme)
        self._state = UploadState(active_theme=theme)
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> UploadState:
        return self._state

    def subscribe(self, listener: StateListener) -> None:
        """Call *listener* with the state after every applied transition."""
        self._listeners.append(listener)

    # ------------------------------------------------------------------
    # transitions
    # ------------------------------------------------------------------

    def select_file(self, file: ResumeFile) -> None:
        """Record *file* and discard any previous result or error."""
        self._state.selected_file = file
        self._state.request = FileSelected()
        logger.debug("Selected %s", file.filename)
        self._notify()

    def submit(self) -> PendingRequest | None:
        """Start a submission of the selected file.

        Returns:
            The request to send, or ``None`` when nothing should be sent
            (no file selected, or a submission is already in flight).
        """
        if self._state.is_submitting:
            logger.debug(
                "Ignoring submit while request %d is in flight", self._state.last_request_id
            )
            return None

        file = self._state.selected_file
        if file is None:
            self._state.request = Failed(NO_FILE_MESSAGE, FailureKind.VALIDATION)
            self._notify()
            return None

        self._state.last_request_id += 1
        request_id = self._state.last_request_id
        self._state.request = Submitting(request_id)
        logger.debug("Submitting %s as request %d", file.filename, request_id)
        self._notify()
        return PendingRequest(request_id=request_id, file=file)

    def complete(self, request_id: int, document: PortfolioDocument) -> bool:
        """Apply a successful response. Returns ``False`` if it was stale."""
        if not self._is_current(request_id):
            return False
        self._state.request = Succeeded(request_id, document)
        self._notify()
        return True

    def fail(self, request_id: int, error: BaseException) -> bool:
        """Apply a failed response. Returns ``False`` if it was stale."""
        if not self._is_current(request_id):
            return False
        kind = FailureKind.SERVER if isinstance(error, ServerError) else FailureKind.TRANSPORT
        self._state.request = Failed(f"Error: {error}", kind, request_id)
        logger.warning("Request %d failed: %s", request_id, error)
        self._notify()
        return True

    def perform(self, pending: PendingRequest, client: GenerationClient) -> bool:
        """Send *pending* through *client* and apply the outcome.

        Returns:
            ``True`` if the outcome was applied to the state.
        """
        try:
            document = client.generate(pending.file)
        except GenerationError as exc:
            return self.fail(pending.request_id, exc)
        return self.complete(pending.request_id, document)

    def change_theme(self, theme_id: str) -> None:
        """Switch the active theme; the request lifecycle is untouched.

        Raises:
            ValueError: If *theme_id* is not a registered theme.
        """
        tokens_for(theme_id)
        self._state.active_theme = theme_id
        self._notify()

    # ------------------------------------------------------------------
    # internal helpers
    # ------------------------------------------------------------------

    def _is_current(self, request_id: int) -> bool:
        if request_id != self._state.last_request_id:
            logger.debug(
                "Discarding stale response for request %d (latest is %d)",
                request_id,
                self._state.last_request_id,
            )
            return False
        return True

    def _notify(self) -> None:
        for listener in self._listeners:
            listener(self._state)
