"""Game API endpoints."""

from fastapi import APIRouter, HTTPException, Request

from api.schemas import CardResponse, DrawResponse, GameStateResponse
from core.cards import Card
from core.game import GameState

router = APIRouter()


def get_game(request: Request) -> GameState:
    """Return the game built by the application lifespan."""
    return request.app.state.game


def _card_to_response(card: Card) -> CardResponse:
    """Convert a Card to CardResponse."""
    return CardResponse(
        rank=card.rank.value,
        suit=card.suit.value,
        symbol=str(card.suit),
        is_red=card.suit.is_red,
    )


def _state_to_response(game: GameState) -> GameStateResponse:
    """Convert the game's snapshot to GameStateResponse."""
    data = game.to_dict()
    return GameStateResponse(
        remaining_cards=data["remaining_cards"],
        running_count=data["running_count"],
        decks_remaining=data["decks_remaining"],
        true_count=data["true_count"],
        num_decks=game.num_decks,
        storage_notice=data["storage_notice"],
    )


@router.get("/state", response_model=GameStateResponse)
async def get_state(request: Request) -> GameStateResponse:
    """Get remaining cards and the running count."""
    return _state_to_response(get_game(request))


@router.post("/draw", response_model=DrawResponse)
async def draw_card(request: Request) -> DrawResponse:
    """Draw and count the top card of the shoe."""
    game = get_game(request)
    card = game.draw_card()
    if card is None:
        raise HTTPException(status_code=409, detail="Shoe is empty. Please reshuffle.")
    return DrawResponse(card=_card_to_response(card), state=_state_to_response(game))


@router.post("/reshuffle", response_model=GameStateResponse)
async def reshuffle(request: Request) -> GameStateResponse:
    """Replace the shoe with a full, freshly shuffled one."""
    game = get_game(request)
    game.reshuffle()
    return _state_to_response(game)
