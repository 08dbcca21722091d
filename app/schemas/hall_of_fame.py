from typing import Optional
from sqlmodel import SQLModel, Field


class HallOfFame(SQLModel, table=True):  # type: ignore[call-arg]
    __tablename__ = "hall_of_fame"

    id: Optional[str] = Field(default=None, primary_key=True)
    name: Optional[str] = Field(default=None)
    # Members are not required to be linked to a manager
    manager_id: Optional[str] = Field(default=None, index=True)
