"""
graph.py — Guided Component Architect (client)
===============================================
Generation controller. One user action drives exactly one cycle through a
small LangGraph pipeline:

  dispatch  →  commit    (service returned a result)
            →  rollback  (transport / service / malformed-response failure)

Phases seen from outside: idle → pending → committed | rolled_back → idle.

Exported: GenerationController
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, TypedDict

from langgraph.graph import END, StateGraph

from architect.errors import GenerationFailure
from architect.service import GenerationService
from architect.session_store import SessionStore
from architect.states import GenerationResult, Phase

logger = logging.getLogger(__name__)

CommitListener = Callable[[GenerationResult], None]


class CycleState(TypedDict, total=False):
    prompt: str
    result: Optional[GenerationResult]
    failure: Optional[GenerationFailure]
    outcome: Phase


class GenerationController:
    """
    Drives generation cycles against a GenerationService and is the only
    writer of the SessionStore.

    Single-flight: a submit while a cycle is pending is ignored rather than
    superseding the request in flight.
    """

    def __init__(self, service: GenerationService, store: Optional[SessionStore] = None):
        self.service = service
        self.store = store or SessionStore()
        self.phase: Phase = Phase.IDLE
        self.last_outcome: Optional[Phase] = None
        self.error: Optional[str] = None
        self._listeners: list[CommitListener] = []
        self._cycle = self._build_cycle()

    @property
    def session_id(self) -> str:
        return self.store.session_id

    @property
    def pending(self) -> bool:
        return self.phase is Phase.PENDING

    def on_commit(self, listener: CommitListener) -> None:
        """Registers a callback invoked with every newly committed result."""
        self._listeners.append(listener)

    # ─────────────────────────────────────────────────────────────────────────
    # Public entry point
    # ─────────────────────────────────────────────────────────────────────────

    async def submit(self, prompt_text: str) -> bool:
        """
        Runs one generation cycle. Returns True if a result was committed.

        Empty prompts and submits while pending are ignored without touching
        the session. Generation failures are surfaced in ``self.error`` and
        leave the turn log as it was before the call.
        """
        if prompt_text is None or not prompt_text.strip():
            logger.debug("[controller] Ignoring empty prompt")
            return False
        if self.pending:
            logger.debug("[controller] Ignoring submit: a request is already pending")
            return False

        turns_before = len(self.store)
        self.store.append_user_turn(prompt_text)
        self.phase = Phase.PENDING
        self.error = None

        final = None
        try:
            final = await self._cycle.ainvoke(
                {"prompt": prompt_text, "result": None, "failure": None},
                {"recursion_limit": 10},
            )
        finally:
            if final is None:
                # Anything that escaped the graph must not leave an orphaned prompt.
                if self.store.pending:
                    logger.error("[controller] Cycle aborted unexpectedly; rolling back prompt")
                    self.store.rollback_last_turn()
                committed_turns = len(self.store) == turns_before + 2
                self.last_outcome = Phase.COMMITTED if committed_turns else Phase.ROLLED_BACK
            self.phase = Phase.IDLE

        self.last_outcome = final["outcome"]
        committed = final["outcome"] is Phase.COMMITTED
        if committed:
            for listener in self._listeners:
                listener(final["result"])
        return committed

    # ─────────────────────────────────────────────────────────────────────────
    # Nodes
    # ─────────────────────────────────────────────────────────────────────────

    async def _dispatch_node(self, state: CycleState) -> dict:
        """Issues the single network call of this cycle."""
        logger.info("[controller] Dispatching prompt (session %s)", self.session_id)
        try:
            result = await self.service.generate(state["prompt"], self.session_id)
        except GenerationFailure as exc:
            return {"failure": exc}
        return {"result": result}

    async def _commit_node(self, state: CycleState) -> dict:
        result = state["result"]
        self.store.append_assistant_turn(result, prompt=state["prompt"])
        self.phase = Phase.COMMITTED
        logger.info(
            "[controller] Committed result (%d iteration(s), success=%s)",
            result.iteration_count, result.success,
        )
        return {"outcome": Phase.COMMITTED}

    async def _rollback_node(self, state: CycleState) -> dict:
        failure = state["failure"]
        self.error = failure.message
        self.store.rollback_last_turn()
        self.phase = Phase.ROLLED_BACK
        logger.warning("[controller] Generation failed, prompt rolled back: %s", failure.message)
        return {"outcome": Phase.ROLLED_BACK}

    @staticmethod
    def _route_outcome(state: CycleState) -> str:
        return "rollback" if state.get("failure") is not None else "commit"

    # ─────────────────────────────────────────────────────────────────────────
    # Graph assembly
    # ─────────────────────────────────────────────────────────────────────────

    def _build_cycle(self):
        graph = StateGraph(CycleState)

        graph.add_node("dispatch", self._dispatch_node)
        graph.add_node("commit", self._commit_node)
        graph.add_node("rollback", self._rollback_node)

        graph.set_entry_point("dispatch")

        graph.add_conditional_edges(
            "dispatch",
            self._route_outcome,
            {"commit": "commit", "rollback": "rollback"},
        )
        graph.add_edge("commit", END)
        graph.add_edge("rollback", END)

        return graph.compile()
