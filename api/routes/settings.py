"""Settings API endpoints."""

from fastapi import APIRouter, Request

from api.routes.game import get_game
from api.schemas import PresetsResponse, SettingsModel
from core.counting import PRESET_TABLES, is_balanced
from core.session import settings_from_labels

router = APIRouter()


@router.get("", response_model=SettingsModel)
async def get_settings(request: Request) -> SettingsModel:
    """Get the active deck count and rank values."""
    game = get_game(request)
    return SettingsModel(
        num_decks=game.num_decks,
        custom_values={rank.value: value for rank, value in game.table.items()},
    )


@router.put("", response_model=SettingsModel)
async def update_settings(body: SettingsModel, request: Request) -> SettingsModel:
    """
    Save new settings and apply them.

    Rank values take effect on the next draw; the deck count takes effect
    on the next reshuffle.
    """
    game = get_game(request)
    settings = game.update_settings(settings_from_labels(body.num_decks, body.custom_values))
    return SettingsModel(
        num_decks=settings.num_decks,
        custom_values={rank.value: value for rank, value in settings.custom_values.items()},
    )


@router.get("/presets", response_model=PresetsResponse)
async def get_presets() -> PresetsResponse:
    """List the built-in counting tables."""
    return PresetsResponse(
        presets={
            name: {rank.value: value for rank, value in table.items()}
            for name, table in PRESET_TABLES.items()
        },
        balanced={name: is_balanced(table) for name, table in PRESET_TABLES.items()},
    )
