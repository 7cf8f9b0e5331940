"""
main.py — Guided Component Architect (client)
==============================================
Interactive terminal client for the component generation service.

Usage:
    python main.py

Session commands:
    <description>   Generate an Angular component
    tab <id>        Show the current result's template | typescript | tokens
    audit           Expand / collapse the latest audit trail
    export          Write the current result to generated_project/generated-component.ts
    copy [tab]      Print the raw code of a tab for copying
    examples        List example prompts
    new             Start a fresh session (new session id, empty history)
    exit            Quit the program

Follow-up prompts (e.g. "make the button rounded") reuse the same session id,
so the service keeps the multi-turn context.
"""

import asyncio
import html
import re

from architect.config import build_service, configure_logging, load_settings
from architect.graph import GenerationController
from architect.sinks import FileArtifactSink
from architect.workbench import (
    DESIGN_TOKENS,
    EXAMPLE_PROMPTS,
    PASSED_PREVIEW,
    TABS,
    Workbench,
    iteration_label,
    status_line,
)

_TAG = re.compile(r"<[^>]+>")
_ICONS = {"error": "✗", "warning": "⚠", "passed": "✓"}


# ─────────────────────────────────────────────────────────────────────────────
# Display helpers
# ─────────────────────────────────────────────────────────────────────────────

def display_result(bench: Workbench) -> None:
    """
    Prints the latest result: iteration badge, validation headline and
    messages, audit trail (collapsed unless toggled) and the active tab.
    """
    result = bench.current
    if result is None:
        print("[ No component generated yet. ]")
        return

    model = bench.presentation(max_passed=PASSED_PREVIEW)
    divider = "=" * 60
    print(f"\n{divider}")
    print(f"  {status_line(result)}  [{iteration_label(result.iteration_count)}]")
    print(f"  Validation: {model.headline}")
    if model.discrepancy:
        print(f"  (!) {model.discrepancy}")
    for message in model.messages:
        print(f"    {_ICONS[message.category.value]} {message.text}")

    if model.audit_label:
        arrow = "▲" if model.audit_expanded else "▼"
        print(f"\n  {arrow} {model.audit_label}")
        if model.audit_expanded:
            for attempt in model.attempts:
                print(f"    {attempt.summary}")
                for err in attempt.errors:
                    print(f"      ✗ {err}")

    display_tab(bench)
    print(divider)


def display_tab(bench: Workbench) -> None:
    print(f"\n--- {TABS[bench.active_tab]} ---")
    if bench.active_tab == "tokens":
        for token in DESIGN_TOKENS:
            print(f"  {token['hex']}  {token['label']}")
        return
    # Terminal output: drop the colour spans, keep the escaped text readable.
    code = _TAG.sub("", bench.highlighted())
    print(html.unescape(code))


# ─────────────────────────────────────────────────────────────────────────────
# Main CLI loop
# ─────────────────────────────────────────────────────────────────────────────

def new_workbench(settings, service) -> Workbench:
    controller = GenerationController(service)
    return Workbench(controller, FileArtifactSink(settings.export_dir))


async def run() -> None:
    """
    Interactive REPL over one Workbench.

    'new' replaces the controller and its store, which also issues a fresh
    session id; the service instance is kept for the whole process.
    """
    settings = load_settings()
    configure_logging(settings.log_level)
    service = build_service(settings)
    bench = new_workbench(settings, service)

    print()
    print("╔══════════════════════════════════════════════════════╗")
    print("║          AngularHelp Client  (v1.0)                  ║")
    print("╚══════════════════════════════════════════════════════╝")
    print()
    mode = "demo (offline)" if settings.demo_mode else settings.api_base
    print(f"Service : {mode}")
    print(f"Session : {bench.controller.session_id}")
    print("Describe an Angular component to generate it. Type 'exit' to quit.")
    print()

    try:
        while True:
            try:
                user_input = (await asyncio.to_thread(input, "You: ")).strip()
            except (EOFError, KeyboardInterrupt):
                print("\nGoodbye!")
                break

            if not user_input:
                continue

            command, _, arg = user_input.partition(" ")
            command = command.lower()
            arg = arg.strip()

            # ── Built-in commands ──────────────────────────────────────────────
            if command == "exit":
                print("Goodbye!")
                break

            if command == "new":
                bench = new_workbench(settings, service)
                print(f"\n[ New session started — {bench.controller.session_id} ]\n")
                continue

            if command == "examples":
                for i, example in enumerate(EXAMPLE_PROMPTS, 1):
                    print(f"  {i}. {example}")
                continue

            if command == "tab" and arg:
                try:
                    bench.select_tab(arg.lower())
                except ValueError as exc:
                    print(f"[ {exc} ]")
                    continue
                display_result(bench)
                continue

            if command == "audit" and not arg:
                bench.toggle_audit()
                display_result(bench)
                continue

            if command == "export" and not arg:
                if bench.export():
                    print(f"[ Exported to {bench.sink.export_path} ]")
                else:
                    print("[ Nothing to export yet. ]")
                continue

            if command == "copy":
                try:
                    if not bench.copy(arg.lower() or None):
                        print("[ Nothing to copy yet. ]")
                except ValueError as exc:
                    print(f"[ {exc} ]")
                continue

            # ── Generation cycle ───────────────────────────────────────────────
            print("\nGenerating...\n")
            if await bench.controller.submit(user_input):
                display_result(bench)
            elif bench.controller.error:
                print(f"[ERROR] {bench.controller.error}. Try again or type 'new' to reset.\n")
            print()
    finally:
        aclose = getattr(service, "aclose", None)
        if aclose is not None:
            await aclose()


# ─────────────────────────────────────────────────────────────────────────────
# Entry point
# ─────────────────────────────────────────────────────────────────────────────

if __name__ == "__main__":
    asyncio.run(run())
