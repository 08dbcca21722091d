from typing import Optional
from sqlmodel import SQLModel, Field


class SeasonStanding(SQLModel, table=True):  # type: ignore[call-arg]
    """One team's outcome in one season.

    (season_id, team_id) is meant to be unique but the admin console never
    enforced it, so no constraint is declared here either.
    """

    __tablename__ = "season_standings"

    id: Optional[int] = Field(default=None, primary_key=True)
    season_id: str = Field(index=True)
    team_id: str = Field(index=True)
    trades_count: Optional[int] = Field(default=0)
    wins: Optional[int] = Field(default=0)
    losses: Optional[int] = Field(default=0)
    ties: Optional[int] = Field(default=0)
    position: Optional[int] = Field(default=None)
