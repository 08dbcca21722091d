from typing import Optional
from sqlmodel import SQLModel, Field


class Season(SQLModel, table=True):  # type: ignore[call-arg]
    __tablename__ = "seasons"

    id: Optional[str] = Field(default=None, primary_key=True)
    # Not unique upstream; duplicate labels are reported by the season index
    year: Optional[str] = Field(default=None, index=True, description="Season label like '2019/2020'")
