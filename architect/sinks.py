"""
sinks.py — Export and clipboard surfaces
=========================================
The workbench never writes files or touches a clipboard itself; it hands text
to an injected ArtifactSink.
"""

from __future__ import annotations

import logging
import pathlib
from typing import Protocol

from architect.states import GenerationResult

logger = logging.getLogger(__name__)

EXPORT_FILENAME = "generated-component.ts"


def build_export_text(result: GenerationResult) -> str:
    """Template and component class concatenated into one downloadable file."""
    return (
        f"<!-- Template -->\n{result.template}\n\n"
        f"/* TypeScript */\n{result.component_source}"
    )


class ArtifactSink(Protocol):
    def export_artifact(self, text: str) -> None:
        ...

    def copy_to_clipboard(self, text: str) -> None:
        ...


class FileArtifactSink:
    """
    Terminal sink: exports land in ``directory/generated-component.ts``;
    "copy" prints the raw text between markers so it can be selected.
    """

    def __init__(self, directory):
        self.directory = pathlib.Path(directory)

    @property
    def export_path(self) -> pathlib.Path:
        return self.directory / EXPORT_FILENAME

    def export_artifact(self, text: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self.export_path.write_text(text, encoding="utf-8")
        logger.info("[sink] Exported %d chars to %s", len(text), self.export_path)

    def copy_to_clipboard(self, text: str) -> None:
        print("----- 8< -----")
        print(text)
        print("----- >8 -----")


class MemorySink:
    """Keeps every exported/copied text; the HTTP bridge returns them to the browser."""

    def __init__(self):
        self.exported: list[str] = []
        self.copied: list[str] = []

    def export_artifact(self, text: str) -> None:
        self.exported.append(text)

    def copy_to_clipboard(self, text: str) -> None:
        self.copied.append(text)
