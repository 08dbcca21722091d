from typing import Optional
from sqlmodel import SQLModel, Field


class Team(SQLModel, table=True):  # type: ignore[call-arg]
    __tablename__ = "teams"

    id: Optional[str] = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    logo_url: Optional[str] = Field(default=None)
    manager_id: Optional[str] = Field(default=None, index=True, description="Current manager")
    is_active: Optional[bool] = Field(default=True)
