"""HTTP client for the portfolio generation service."""

from __future__ import annotations

import logging

import requests
from pydantic import ValidationError

from portfolio_generator.models.portfolio import PortfolioDocument
from portfolio_generator.models.request_state import ResumeFile

logger = logging.getLogger(__name__)

RESUME_FIELD = "resume"


class GenerationError(RuntimeError):
    """Raised when a portfolio could not be generated."""


class ServerError(GenerationError):
    """The service answered with a non-success status."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Server responded with a non-200 status: {body}")


class TransportError(GenerationError):
    """The request did not complete or the response could not be decoded."""


class GenerationClient:
    """Sends a resume to the generation endpoint and decodes the portfolio.

    The client closes its ``requests.Session`` on ``close()`` only when it
    created that session itself. Use it as a context manager to release the
    connection pool.
    """

    def __init__(
        self,
        api_url: str,
        *,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.api_url = api_url
        self.timeout = timeout
        self._owns_session = session is None
        self._session = session or requests.Session()

    def __enter__(self) -> GenerationClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def generate(self, resume: ResumeFile) -> PortfolioDocument:
        """Upload *resume* and return the generated portfolio.

        Raises:
            ServerError: If the service responds with a non-2xx status.
            TransportError: If the service is unreachable, the request cannot be
                sent, or the body is not a portfolio JSON object.
        """
        files = {RESUME_FIELD: (resume.filename, resume.content, resume.content_type)}
        logger.info(
            "Uploading %s (%d bytes) to %s", resume.filename, resume.size_bytes, self.api_url
        )

        try:
            response = self._session.post(self.api_url, files=files, timeout=self.timeout)
        except (requests.RequestException, ValueError) as exc:
            logger.warning("Request to %s failed: %s", self.api_url, exc)
            raise TransportError(str(exc)) from exc

        if not 200 <= response.status_code < 300:
            logger.warning("Generation service returned %s", response.status_code)
            # Only the newline appended by the server's error writer is dropped.
            raise ServerError(response.status_code, response.text.rstrip("\n"))

        return self._decode(response)

    @staticmethod
    def _decode(response: requests.Response) -> PortfolioDocument:
        try:
            payload = response.json()
        except ValueError as exc:
            raise TransportError(f"Failed to parse portfolio response: {exc}") from exc

        if not isinstance(payload, dict):
            kind = type(payload).__name__
            msg = f"Failed to parse portfolio response: expected an object, got {kind}"
            raise TransportError(msg)

        try:
            return PortfolioDocument.model_validate(payload)
        except ValidationError as exc:
            raise TransportError(f"Failed to parse portfolio response: {exc}") from exc
