"""
server.py — AngularHelp client bridge
=====================================
Serves the client workbench as JSON so a browser shell can render it. The
bridge owns one session per process; the generation service is reached
through the same controller the terminal client uses.

Start with:
    uvicorn frontend.api.server:app --reload --port 5173
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse, PlainTextResponse
from pydantic import BaseModel

from architect.config import ClientSettings, build_service, configure_logging, load_settings
from architect.graph import GenerationController
from architect.service import GenerationService
from architect.sinks import EXPORT_FILENAME, MemorySink
from architect.workbench import DESIGN_TOKENS, EXAMPLE_PROMPTS, Workbench

# ─────────────────────────────────────────────────────────────────────────────
# Request / Response schemas
# ─────────────────────────────────────────────────────────────────────────────

class SubmitRequest(BaseModel):
    prompt: str


class TabRequest(BaseModel):
    tab: str


class AuditResponse(BaseModel):
    turn_index: int
    expanded: bool


# ─────────────────────────────────────────────────────────────────────────────
# App factory
# ─────────────────────────────────────────────────────────────────────────────

def _new_bench(service: GenerationService) -> Workbench:
    return Workbench(GenerationController(service), MemorySink())


def _bench(request: Request) -> Workbench:
    return request.app.state.bench


def create_app(
    service: Optional[GenerationService] = None,
    settings: Optional[ClientSettings] = None,
) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.log_level)
    service = service or build_service(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        aclose = getattr(app.state.service, "aclose", None)
        if aclose is not None:
            await aclose()

    app = FastAPI(title="AngularHelp Client API", version="1.0.0", lifespan=lifespan)
    app.state.service = service
    app.state.bench = _new_bench(service)

    # ── Routes ────────────────────────────────────────────────────────────────

    @app.get("/api/state")
    async def state(request: Request):
        return _bench(request).snapshot()

    @app.post("/api/submit")
    async def submit(body: SubmitRequest, request: Request):
        """
        Runs one generation cycle. Empty prompts and submits while another
        cycle is pending leave the state untouched; failures show up in the
        snapshot's ``error`` field.
        """
        bench = _bench(request)
        await bench.controller.submit(body.prompt)
        return bench.snapshot()

    @app.post("/api/tab")
    async def select_tab(body: TabRequest, request: Request):
        bench = _bench(request)
        try:
            bench.select_tab(body.tab)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return {"active_tab": bench.active_tab}

    @app.post("/api/audit/{turn_index}", response_model=AuditResponse)
    async def toggle_audit(turn_index: int, request: Request):
        try:
            expanded = _bench(request).toggle_audit(turn_index)
        except IndexError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return AuditResponse(turn_index=turn_index, expanded=expanded)

    @app.get("/api/highlight/{tab}", response_class=HTMLResponse)
    async def highlighted(tab: str, request: Request):
        try:
            markup = _bench(request).highlighted(tab)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        if markup is None:
            raise HTTPException(status_code=404, detail="No component in this session yet.")
        return HTMLResponse(content=markup)

    @app.get("/api/code/{tab}", response_class=PlainTextResponse)
    async def raw_code(tab: str, request: Request):
        """Raw code of a tab; the browser puts it on the clipboard."""
        bench = _bench(request)
        try:
            copied = bench.copy(tab)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        if not copied:
            raise HTTPException(status_code=404, detail="No component in this session yet.")
        return PlainTextResponse(bench.sink.copied[-1])

    @app.get("/api/export", response_class=PlainTextResponse)
    async def export(request: Request):
        bench = _bench(request)
        if not bench.export():
            raise HTTPException(status_code=404, detail="No component in this session yet.")
        return PlainTextResponse(
            bench.sink.exported[-1],
            headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
        )

    @app.post("/api/reset")
    async def reset(request: Request):
        """Drops the conversation and starts a session with a fresh id."""
        if _bench(request).controller.pending:
            raise HTTPException(status_code=409, detail="A generation request is in flight.")
        request.app.state.bench = _new_bench(request.app.state.service)
        return request.app.state.bench.snapshot()

    @app.get("/api/examples")
    async def examples():
        return {"prompts": EXAMPLE_PROMPTS}

    @app.get("/api/tokens")
    async def tokens():
        return {"tokens": DESIGN_TOKENS}

    return app


app = create_app()
