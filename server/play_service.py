"""REST service to play Klondike from a remote UI."""

from __future__ import annotations

import logging
import os
import threading
import uuid
from collections import OrderedDict
from dataclasses import asdict
from typing import Dict, List, Literal, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, ValidationError, model_validator

from klondike.deal_schema import DealOrder
from klondike.game import GameResult, GameSession
from klondike.service import GameService, TableView

logger = logging.getLogger(__name__)


class ServiceSettings(BaseModel):
    max_sessions: int = Field(1000, ge=1, description="Open sessions kept before the least recently used one is evicted.")
    default_seed: Optional[int] = Field(None, description="Seed used when a start request carries none.")

    @classmethod
    def from_env(cls) -> "ServiceSettings":
        values: Dict[str, object] = {}
        if os.environ.get("KLONDIKE_MAX_SESSIONS"):
            values["max_sessions"] = os.environ["KLONDIKE_MAX_SESSIONS"]
        if os.environ.get("KLONDIKE_SEED"):
            values["default_seed"] = os.environ["KLONDIKE_SEED"]
        return cls(**values)


class StartRequest(BaseModel):
    seed: Optional[int] = None
    deck: Optional[List[str]] = Field(None, description="Fixed deal order, bottom of the stock first.")


class ClickRequest(BaseModel):
    zone: Literal["stock", "waste", "pile", "foundation"]
    index: Optional[int] = None

    @model_validator(mode="after")
    def check_index(self) -> "ClickRequest":
        if self.zone in ("pile", "foundation") and self.index is None:
            raise ValueError(f"A {self.zone} click needs an index.")
        return self


class SessionState:
    def __init__(self, service: GameService) -> None:
        self.service = service
        self.lock = threading.Lock()


settings = ServiceSettings.from_env()
sessions: "OrderedDict[str, SessionState]" = OrderedDict()
sessions_lock = threading.Lock()


app = FastAPI(title="Klondike Play Service")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def serialize_state(view: TableView) -> Dict[str, object]:
    return asdict(view)


def serialize_result(result: GameResult) -> Dict[str, object]:
    return {
        "won": result.won,
        "foundationCards": result.foundation_cards,
        "clicks": result.clicks,
    }


def ensure_session(session_id: str) -> SessionState:
    with sessions_lock:
        session = sessions.get(session_id)
        if session is None:
            raise HTTPException(status_code=404, detail="Session not found")
        sessions.move_to_end(session_id)
    return session


def register_session(session_id: str, session: SessionState) -> None:
    with sessions_lock:
        while len(sessions) >= settings.max_sessions:
            evicted, _ = sessions.popitem(last=False)
            logger.info("Evicted idle session %s", evicted)
        sessions[session_id] = session


def parse_deal_order(cards: Optional[List[str]]) -> Optional[DealOrder]:
    if cards is None:
        return None
    try:
        return DealOrder(cards=cards)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.errors(include_url=False, include_context=False)) from exc


@app.post("/session/start")
def start_session(request: StartRequest) -> Dict[str, object]:
    order = parse_deal_order(request.deck)
    seed = request.seed if request.seed is not None else settings.default_seed
    service = GameService(GameSession(seed=seed))
    view = service.start_new_game(order)
    session_id = uuid.uuid4().hex
    register_session(session_id, SessionState(service))
    logger.info("Created session %s", session_id)
    return {
        "session_id": session_id,
        "state": serialize_state(view),
    }


@app.get("/session/{session_id}")
def get_session(session_id: str) -> Dict[str, object]:
    session = ensure_session(session_id)
    with session.lock:
        return {"state": serialize_state(session.service.get_table_view())}


@app.post("/session/{session_id}/click")
def click(session_id: str, request: ClickRequest) -> Dict[str, object]:
    session = ensure_session(session_id)
    with session.lock:
        try:
            view = session.service.click(request.zone, request.index)
        except IndexError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return {"state": serialize_state(view)}


@app.post("/session/{session_id}/new")
def new_game(session_id: str) -> Dict[str, object]:
    session = ensure_session(session_id)
    with session.lock:
        result = session.service.finish_game()
        view = session.service.start_new_game()
        logger.info("Session %s dealt game %d", session_id, session.service.session.games_played + 1)
        return {
            "summary": serialize_result(result),
            "state": serialize_state(view),
        }


@app.delete("/session/{session_id}")
def close_session(session_id: str) -> Dict[str, object]:
    with sessions_lock:
        if sessions.pop(session_id, None) is None:
            raise HTTPException(status_code=404, detail="Session not found")
    logger.info("Closed session %s", session_id)
    return {"closed": session_id}
