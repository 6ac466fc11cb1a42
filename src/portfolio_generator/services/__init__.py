"""Service layer: generation client and request lifecycle."""

from portfolio_generator.services.generation_client import (
    GenerationClient,
    GenerationError,
    ServerError,
    TransportError,
)
from portfolio_generator.services.request_machine import NO_FILE_MESSAGE, RequestStateMachine

__all__ = [
    "NO_FILE_MESSAGE",
    "GenerationClient",
    "GenerationError",
    "RequestStateMachine",
    "ServerError",
    "TransportError",
]
