"""
errors.py — Guided Component Architect (client)
================================================
Exception taxonomy for the generation session.

  InvalidInput / RequestInFlight   rejected before any mutation or network call
  EmptyLog                         rollback requested on an empty turn log
  GenerationFailure                a network call was made and did not commit:
      TransportFailure             network error or timeout
      ServiceFailure               non-2xx status
      MalformedResponse            2xx with an undecodable body
"""

from __future__ import annotations

from typing import Optional


class ArchitectError(Exception):
    """Base class for all client errors."""


class InvalidInput(ArchitectError):
    """Prompt text is empty or whitespace-only."""


class RequestInFlight(InvalidInput):
    """A generation request is already pending for this session."""


class EmptyLog(ArchitectError):
    """The turn log has nothing to roll back."""


class GenerationFailure(ArchitectError):
    """
    A generation call was issued but produced no committable result.

    ``message`` is the human-readable text surfaced in the error slot.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TransportFailure(GenerationFailure):
    pass


class ServiceFailure(GenerationFailure):

    def __init__(self, status_code: int, detail: Optional[str] = None):
        message = f"API error {status_code}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.status_code = status_code


class MalformedResponse(GenerationFailure):
    pass
