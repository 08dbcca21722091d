from typing import Optional
from sqlmodel import SQLModel, Field


class ManagerHistory(SQLModel, table=True):  # type: ignore[call-arg]
    __tablename__ = "manager_history"

    id: Optional[str] = Field(default=None, primary_key=True)
    manager_id: Optional[str] = Field(default=None, index=True)
    year: str = Field(index=True, description="Season label like '2019/2020'")
    team_id: Optional[str] = Field(default=None, index=True)
