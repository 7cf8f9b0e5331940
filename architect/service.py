"""
service.py — Generation service client
=======================================
Async HTTP client for the remote generation service.

    POST {base_url}/generate   {"prompt": ..., "session_id": ...}

Every failure is raised as one of the GenerationFailure subclasses so the
controller can handle them uniformly.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional, Protocol

import httpx
from pydantic import ValidationError

from architect.errors import MalformedResponse, ServiceFailure, TransportFailure
from architect.states import GenerateRequest, GenerationResult

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 120.0


class GenerationService(Protocol):
    async def generate(self, prompt: str, session_id: str) -> GenerationResult:
        ...


def parse_generation_result(payload: Any) -> GenerationResult:
    """Validates a decoded response body into a GenerationResult."""
    if not isinstance(payload, dict):
        raise MalformedResponse(
            f"Malformed response: expected a JSON object, got {type(payload).__name__}"
        )
    try:
        return GenerationResult.model_validate(payload)
    except ValidationError as exc:
        problems = [
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in exc.errors()
        ]
        raise MalformedResponse(f"Malformed response: {'; '.join(problems)}") from exc


class HttpGenerationService:
    """
    Talks to the generation service over HTTP.

    A ``transport`` may be injected (e.g. ``httpx.MockTransport``) for tests.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    async def generate(self, prompt: str, session_id: str) -> GenerationResult:
        body = GenerateRequest(prompt=prompt, session_id=session_id).model_dump()
        logger.info("[service] POST %s/generate (session %s)", self.base_url, session_id)

        try:
            response = await self._client.post("/generate", json=body)
        except httpx.TimeoutException as exc:
            raise TransportFailure(
                f"Request timed out after {self.timeout:g}s"
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportFailure(f"Network error: {exc}") from exc

        if not response.is_success:
            raise ServiceFailure(response.status_code)

        try:
            payload = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise MalformedResponse("Malformed response: body is not valid JSON") from exc

        return parse_generation_result(payload)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "HttpGenerationService":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
