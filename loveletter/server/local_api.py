"""FastAPI endpoints for local pass-and-play games."""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from loveletter.app.local_game_service import LocalGameService
from loveletter.domain.actions import CardAction
from loveletter.domain.cards import Card
from loveletter.domain.errors import (
    InvalidAction,
    InvalidConfiguration,
    InvalidState,
    NotCurrentPlayer,
)

# ---------------------------------------------------------------------------
# Pydantic request / response models
# ---------------------------------------------------------------------------


class CreateGameRequest(BaseModel):
    players: list[str] = Field(
        ..., min_length=3, max_length=4, description="3-4 seat display names"
    )
    seed: int | None = Field(
        default=None, description="Optional RNG seed for reproducible deals"
    )


class CreateGameResponse(BaseModel):
    game_id: str


class PlayerPublicView(BaseModel):
    id: int
    name: str
    discards: list[str]
    active: bool
    protected: bool
    hand_size: int


class PublicTableView(BaseModel):
    players: list[PlayerPublicView]
    cards_remaining: int


class ActionView(BaseModel):
    card: str
    target: int | None = None
    guess: str | None = None


class RoundResultView(BaseModel):
    winners: list[int]
    winner_names: list[str]
    hands: dict[str, str]
    discard_values: dict[str, int]


class TurnResponse(BaseModel):
    game_id: str
    status: str
    active_player_id: int
    active_player_name: str
    requires_handoff: bool = False
    public_table: PublicTableView
    private_hand: list[str] | None = None
    legal_actions: list[ActionView] = []
    messages: list[str] = []
    result: RoundResultView | None = None


class SubmitActionRequest(BaseModel):
    player_id: int
    action: ActionView


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------


def create_app(service: LocalGameService | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(title="Love Letter Local Play", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    svc = service or LocalGameService()
    app.state.service = svc

    @app.get("/api/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/local-games", response_model=CreateGameResponse, status_code=201)
    def create_game(req: CreateGameRequest) -> CreateGameResponse:
        try:
            session = svc.create_game(req.players, seed=req.seed)
        except (ValueError, InvalidConfiguration) as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return CreateGameResponse(game_id=session.game_id)

    @app.get("/api/local-games/{game_id}", response_model=TurnResponse)
    def get_turn(game_id: str, player_id: int | None = None) -> TurnResponse:
        try:
            view = svc.get_turn_view(game_id, player_id)
        except KeyError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except InvalidConfiguration as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return _turn_view_to_response(view)

    @app.post("/api/local-games/{game_id}/actions", response_model=TurnResponse)
    def submit_action(game_id: str, req: SubmitActionRequest) -> TurnResponse:
        action = _parse_action(req.player_id, req.action)
        try:
            view = svc.submit_action(game_id, req.player_id, action)
        except KeyError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except NotCurrentPlayer as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        except (InvalidAction, InvalidConfiguration) as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except InvalidState as exc:
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        return _turn_view_to_response(view)

    return app


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _parse_card(text: str) -> Card:
    try:
        return Card.parse(text)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _parse_action(player_id: int, req: ActionView) -> CardAction:
    """Convert an ActionView pydantic model into a domain CardAction."""
    guess = _parse_card(req.guess) if req.guess is not None else None
    return CardAction(
        card=_parse_card(req.card),
        current=player_id,
        target_id=req.target,
        guessed=guess,
    )


def _turn_view_to_response(view: dict[str, Any]) -> TurnResponse:
    """Convert the service turn view dict into a TurnResponse."""
    pub = view["public_table"]
    public_table = PublicTableView(
        players=[PlayerPublicView(**p) for p in pub["players"]],
        cards_remaining=pub["cards_remaining"],
    )
    legal = [ActionView(**la) for la in view.get("legal_actions", [])]
    result = None
    if view.get("result") is not None:
        result = RoundResultView(**view["result"])
    return TurnResponse(
        game_id=view["game_id"],
        status=view["status"],
        active_player_id=view["active_player_id"],
        active_player_name=view["active_player_name"],
        requires_handoff=view.get("requires_handoff", False),
        public_table=public_table,
        private_hand=view.get("private_hand"),
        legal_actions=legal,
        messages=view.get("messages", []),
        result=result,
    )
