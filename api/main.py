import os
import sys
import json
import asyncio
import logging
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response, StreamingResponse
from pydantic import BaseModel

# ── Setup ───────────────────────────────────────────────────────────────────
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))
load_dotenv(PROJECT_ROOT / ".env")

from integrations.fold_engine import InvalidWidthError, validate_width
from integrations.grid_renderer import grid_to_svg
from integrations.session import DEFAULT_TEXT, DEFAULT_WIDTH, CipherSession

logger = logging.getLogger(__name__)

VERSION = "1.0.0"
DEFAULT_MESSAGE = os.environ.get("ORIGAMI_DEFAULT_TEXT", DEFAULT_TEXT)


def _env_width(name: str, default: int) -> int:
    """Grid width from the environment; a malformed value falls back to default."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return validate_width(int(raw))
    except ValueError as e:
        logger.warning(f"Ignoring {name}={raw!r} ({e}), using {default}")
        return default


DEFAULT_GRID_WIDTH = _env_width("ORIGAMI_DEFAULT_WIDTH", DEFAULT_WIDTH)

STEP_DELAY = float(os.environ.get("ORIGAMI_STEP_DELAY", "0.6"))

session = CipherSession(DEFAULT_MESSAGE, DEFAULT_GRID_WIDTH)

# ── FastAPI ─────────────────────────────────────────────────────────────────
app = FastAPI(title="Origami Cipher", version=VERSION)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


class MessageRequest(BaseModel):
    text: str


class WidthRequest(BaseModel):
    width: int


class FoldRequest(BaseModel):
    axis: Literal["horizontal", "vertical"]


class StateResponse(BaseModel):
    text: str
    width: int
    grid: dict
    folds: list[dict]
    ciphertext: str
    trace: list[str]
    current_fold: int


class RunResponse(BaseModel):
    ciphertext: str
    trace: list[str]
    grid: dict


def _state() -> StateResponse:
    return StateResponse(**session.to_dict())


@app.get("/state", response_model=StateResponse)
def get_state():
    return _state()


@app.put("/message", response_model=StateResponse)
def set_message(req: MessageRequest):
    session.set_text(req.text)
    return _state()


@app.put("/width", response_model=StateResponse)
def set_width(req: WidthRequest):
    try:
        session.set_width(req.width)
    except InvalidWidthError as e:
        logger.warning(f"Rejected width change: {e}")
        raise HTTPException(status_code=422, detail=str(e))
    return _state()


@app.post("/folds", response_model=StateResponse)
def add_fold(req: FoldRequest):
    session.add_fold(req.axis)
    return _state()


@app.delete("/folds/{index}", response_model=StateResponse)
def remove_fold(index: int):
    try:
        session.remove_fold(index)
    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _state()


@app.post("/run", response_model=RunResponse)
def run():
    ciphertext = session.run()
    return RunResponse(ciphertext=ciphertext, trace=session.trace, grid=session.display_grid.to_dict())


@app.post("/reset", response_model=StateResponse)
def reset():
    session.reset()
    return _state()


@app.get("/grid.svg")
def grid_svg():
    return Response(content=grid_to_svg(session.display_grid), media_type="image/svg+xml")


# ── SSE Streaming Run ───────────────────────────────────────────────────────

def _sse_event(event_type: str, data: dict) -> str:
    """Format an SSE event."""
    return f"event: {event_type}\ndata: {json.dumps(data, ensure_ascii=False)}\n\n"


@app.post("/run/stream")
async def run_stream():
    """Stepwise run using Server-Sent Events.

    Emits events:
      - step: {index, fold, grid, trace}  (one per fold, STEP_DELAY apart)
      - done: {ciphertext, trace}
    """
    async def event_generator():
        for step in session.steps():
            yield _sse_event("step", {
                "index": step.index,
                "fold": step.fold.to_dict(),
                "grid": step.grid.to_dict(),
                "trace": list(step.trace),
            })
            if not step.is_last:
                await asyncio.sleep(STEP_DELAY)

        yield _sse_event("done", {
            "ciphertext": session.ciphertext,
            "trace": session.trace,
        })

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        }
    )


@app.get("/health")
def health():
    return {"status": "ok", "version": VERSION, "name": "Origami Cipher"}
