"""
workbench.py — Result panel view state
=======================================
Presentation-only state layered over the generation controller: the selected
tab, which audit trails are expanded, and the copy/export actions.

None of this is part of the session; a fresh Workbench over the same
controller starts collapsed on the default tab.
"""

from __future__ import annotations

from typing import Optional

from architect.graph import GenerationController
from architect.highlighter import highlight
from architect.presenter import PresentationModel, present
from architect.selector import current_result
from architect.sinks import ArtifactSink, build_export_text
from architect.states import GenerationResult, Role

TABS = {
    "template": "HTML Template",
    "typescript": "TypeScript",
    "tokens": "Design Tokens",
}
DEFAULT_TAB = "template"

CODE_TABS = {
    "template": ("template", "html"),
    "typescript": ("component_source", "ts"),
}

DESIGN_TOKENS = [
    {"label": "Primary", "hex": "#6366f1"},
    {"label": "Primary Dark", "hex": "#4f46e5"},
    {"label": "Secondary", "hex": "#0ea5e9"},
    {"label": "Accent", "hex": "#f59e0b"},
    {"label": "Success", "hex": "#10b981"},
    {"label": "Error", "hex": "#ef4444"},
    {"label": "Neutral 50", "hex": "#f8fafc"},
    {"label": "Neutral 900", "hex": "#0f172a"},
]

EXAMPLE_PROMPTS = [
    "A login card with glassmorphism effect",
    "A pricing table with 3 tiers",
    "A dark-mode notification toast",
    "A file upload dropzone with drag support",
    "A user profile card with avatar and stats",
]

# The chat panel lists only the first few passed checks per result.
PASSED_PREVIEW = 3


def iteration_label(n: int) -> str:
    return "1 pass" if n == 1 else f"{n} iterations"


def status_line(result: GenerationResult) -> str:
    if result.success:
        return "Passed all validation checks"
    return "Generated with warnings — review output"


class Workbench:

    def __init__(self, controller: GenerationController, sink: ArtifactSink):
        self.controller = controller
        self.sink = sink
        self.active_tab = DEFAULT_TAB
        self._expanded: set[int] = set()
        controller.on_commit(self._on_commit)

    def _on_commit(self, result: GenerationResult) -> None:
        self.active_tab = DEFAULT_TAB

    @property
    def current(self) -> Optional[GenerationResult]:
        return current_result(self.controller.store)

    # ─────────────────────────────────────────────────────────────────────────
    # Tabs and audit toggles
    # ─────────────────────────────────────────────────────────────────────────

    def select_tab(self, tab: str) -> None:
        if tab not in TABS:
            raise ValueError(f"Unknown tab '{tab}'. Available: {', '.join(TABS)}")
        self.active_tab = tab

    def _assistant_turn(self, turn_index: int):
        turns = self.controller.store.turns
        if not 0 <= turn_index < len(turns) or turns[turn_index].role is not Role.ASSISTANT:
            raise IndexError(f"Turn {turn_index} is not an assistant turn")
        return turns[turn_index]

    def _last_assistant_index(self) -> Optional[int]:
        turns = self.controller.store.turns
        for index in range(len(turns) - 1, -1, -1):
            if turns[index].role is Role.ASSISTANT:
                return index
        return None

    def toggle_audit(self, turn_index: Optional[int] = None) -> bool:
        """Flips the audit trail of an assistant turn (default: latest). Returns the new state."""
        if turn_index is None:
            turn_index = self._last_assistant_index()
            if turn_index is None:
                return False
        self._assistant_turn(turn_index)
        if turn_index in self._expanded:
            self._expanded.discard(turn_index)
            return False
        self._expanded.add(turn_index)
        return True

    def presentation(
        self, turn_index: Optional[int] = None, max_passed: Optional[int] = None
    ) -> Optional[PresentationModel]:
        if turn_index is None:
            turn_index = self._last_assistant_index()
            if turn_index is None:
                return None
        result = self._assistant_turn(turn_index).result
        return present(
            result.validation,
            result.audit_trail,
            max_passed=max_passed,
            audit_expanded=turn_index in self._expanded,
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Code views and artifact actions
    # ─────────────────────────────────────────────────────────────────────────

    def _code(self, tab: str) -> tuple[str, str]:
        if tab not in CODE_TABS:
            raise ValueError(f"Tab '{tab}' has no code")
        attr, lang = CODE_TABS[tab]
        return getattr(self.current, attr), lang

    def highlighted(self, tab: Optional[str] = None) -> Optional[str]:
        if self.current is None:
            return None
        code, lang = self._code(tab or self.active_tab)
        return highlight(code, lang)

    def export(self) -> bool:
        result = self.current
        if result is None:
            return False
        self.sink.export_artifact(build_export_text(result))
        return True

    def copy(self, tab: Optional[str] = None) -> bool:
        if self.current is None:
            return False
        code, _ = self._code(tab or self.active_tab)
        self.sink.copy_to_clipboard(code)
        return True

    # ─────────────────────────────────────────────────────────────────────────
    # Snapshot
    # ─────────────────────────────────────────────────────────────────────────

    def snapshot(self) -> dict:
        """JSON-friendly view of the whole panel."""
        ctl = self.controller
        turns = []
        for index, turn in enumerate(ctl.store.turns):
            if turn.role is Role.USER:
                turns.append({"index": index, "role": "user", "content": turn.content})
                continue
            result = turn.result
            turns.append({
                "index": index,
                "role": "assistant",
                "prompt": turn.prompt,
                "success": result.success,
                "iterations": result.iteration_count,
                "iteration_label": iteration_label(result.iteration_count),
                "status": status_line(result),
                "presentation": self.presentation(index, PASSED_PREVIEW).model_dump(mode="json"),
            })

        result = self.current
        current = None
        if result is not None:
            current = {
                "template": result.template,
                "typescript": result.component_source,
                "success": result.success,
                "iterations": result.iteration_count,
                "iteration_label": iteration_label(result.iteration_count),
            }

        return {
            "session_id": ctl.session_id,
            "phase": ctl.phase.value,
            "error": ctl.error,
            "active_tab": self.active_tab,
            "tabs": [{"id": k, "label": v} for k, v in TABS.items()],
            "turns": turns,
            "current": current,
        }
