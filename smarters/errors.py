from __future__ import annotations


class PlaylistError(Exception):
    """Base class for playlist loading failures."""


class TransportFailure(PlaylistError):
    """Non-200 response, timeout or refused connection."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class UnexpectedTransportError(PlaylistError):
    """Any other fault raised by the transport."""


def describe_error(exc: BaseException) -> str:
    text = str(exc).strip()
    return text or exc.__class__.__name__
