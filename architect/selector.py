"""Current-result selection for display."""

from __future__ import annotations

from typing import Optional

from architect.session_store import SessionStore
from architect.states import GenerationResult


def current_result(store: SessionStore) -> Optional[GenerationResult]:
    """
    The result of the most recent assistant turn, independent of which turn
    the user is looking at. The store materializes it on every write, so a
    commit is visible immediately.
    """
    return store.latest_assistant_result()
