from typing import Optional
from sqlmodel import SQLModel, Field


class Champion(SQLModel, table=True):  # type: ignore[call-arg]
    __tablename__ = "champions"

    id: Optional[str] = Field(default=None, primary_key=True)
    year: str = Field(index=True)
    team: str = Field(description="Champion team label as displayed")
    manager_id: Optional[str] = Field(default=None, index=True)
    team_id: Optional[str] = Field(default=None, index=True)
    runner_up_team_id: Optional[str] = Field(default=None)
