"""Board-game log models for cadence."""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field

from cadence.models.constants import DRAW


class Game(BaseModel):
    id: str
    name: str
    is_active: bool = True


class GameSession(BaseModel):
    """One logged play of a game."""

    id: str
    game_id: str
    date: date
    duration_min: Optional[int] = Field(None, ge=0)
    players: List[str] = Field(default_factory=list)
    winner: str = Field(DRAW, description="Winning player's name, or 'Draw'")
    location: str = ""


class PlayerStanding(BaseModel):
    name: str
    wins: int
    games: int
    win_rate: float = Field(..., description="Wins over games played, percent")


class GamePlayCount(BaseModel):
    game_id: str
    name: str
    count: int
    last_played: date


class LocationCount(BaseModel):
    location: str
    count: int


class GameOverview(BaseModel):
    games_count: int
    sessions_count: int
    unique_players_count: int
    avg_duration: Optional[int] = None
