"""
session_store.py — In-memory conversation log
==============================================
Holds the ordered turns of one client session plus the in-flight flag.

The store is append-only apart from ``rollback_last_turn``, which the
generation controller uses to undo an uncommitted user turn after a failed
request. The most recent assistant result is materialized on write so the
current-result lookup never rescans the log.
"""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from architect.errors import EmptyLog, InvalidInput, RequestInFlight
from architect.states import GenerationResult, Role, Turn

logger = logging.getLogger(__name__)


def new_session_id() -> str:
    """Opaque, collision-resistant id sent with every request of a session."""
    return f"session_{uuid.uuid4().hex}"


class SessionStore:

    def __init__(self, session_id: Optional[str] = None):
        self._session_id = session_id or new_session_id()
        self._turns: list[Turn] = []
        self._latest: Optional[GenerationResult] = None
        self._pending = False

    # ─────────────────────────────────────────────────────────────────────────
    # Read-only views
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def pending(self) -> bool:
        return self._pending

    @property
    def turns(self) -> tuple[Turn, ...]:
        return tuple(self._turns)

    def __len__(self) -> int:
        return len(self._turns)

    def latest_assistant_result(self) -> Optional[GenerationResult]:
        return self._latest

    def conversation_history(self) -> list[dict]:
        """Role/content message dicts, assistant results summarized in one line."""
        history = []
        for turn in self._turns:
            if turn.role is Role.USER:
                history.append({"role": "user", "content": turn.content})
            else:
                result = turn.result
                status = "passed" if result.success else "completed with warnings"
                history.append({
                    "role": "assistant",
                    "content": (
                        f"Generated component in {result.iteration_count} iteration(s), "
                        f"validation {status}."
                    ),
                })
        return history

    # ─────────────────────────────────────────────────────────────────────────
    # Mutations (generation controller only)
    # ─────────────────────────────────────────────────────────────────────────

    def append_user_turn(self, prompt_text: str) -> Turn:
        if prompt_text is None or not prompt_text.strip():
            raise InvalidInput("Prompt must not be empty.")
        if self._pending:
            raise RequestInFlight("A generation request is already pending.")

        turn = Turn(role=Role.USER, content=prompt_text)
        self._turns.append(turn)
        self._pending = True
        logger.debug("[store] user turn #%d appended", len(self._turns) - 1)
        return turn

    def append_assistant_turn(
        self, result: GenerationResult, prompt: Optional[str] = None
    ) -> Turn:
        if not self._pending:
            raise InvalidInput("No pending user turn to answer.")

        turn = Turn(role=Role.ASSISTANT, content=result, prompt=prompt)
        self._turns.append(turn)
        self._latest = result
        self._pending = False
        logger.debug("[store] assistant turn #%d appended", len(self._turns) - 1)
        return turn

    def rollback_last_turn(self) -> Turn:
        if not self._turns:
            raise EmptyLog("Turn log is empty; nothing to roll back.")

        turn = self._turns.pop()
        # An answered prompt becomes unanswered again when its result is removed.
        self._pending = bool(self._turns) and self._turns[-1].role is Role.USER
        if turn.role is Role.ASSISTANT:
            self._latest = next(
                (t.result for t in reversed(self._turns) if t.role is Role.ASSISTANT),
                None,
            )
        logger.debug("[store] rolled back %s turn #%d", turn.role.value, len(self._turns))
        return turn
