"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.cards import Rank

RANK_LABELS = [rank.value for rank in Rank]


class CardResponse(BaseModel):
    """Card representation."""

    model_config = ConfigDict(from_attributes=True)

    rank: str
    suit: str
    symbol: str
    is_red: bool


class GameStateResponse(BaseModel):
    """Current shoe and count."""

    remaining_cards: int
    running_count: int
    decks_remaining: float
    true_count: float
    num_decks: int
    storage_notice: str | None = None


class DrawResponse(BaseModel):
    """A drawn card and the state after counting it."""

    card: CardResponse
    state: GameStateResponse


class SettingsModel(BaseModel):
    """Shoe size and per-rank count values."""

    num_decks: int = Field(default=1, ge=1, description="Decks in a new shoe")
    custom_values: dict[str, int] = Field(
        ..., description="Count value per rank label (2-10, J, Q, K, A)"
    )

    @field_validator("custom_values")
    @classmethod
    def check_known_ranks(cls, values: dict[str, int]) -> dict[str, int]:
        unknown = sorted(set(values) - set(RANK_LABELS))
        if unknown:
            raise ValueError(f"Unknown rank labels: {', '.join(unknown)}")
        return values


class PresetsResponse(BaseModel):
    """Built-in counting tables."""

    presets: dict[str, dict[str, int]]
    balanced: dict[str, bool] = Field(
        ..., description="Whether a full deck counts back to zero under each table"
    )
