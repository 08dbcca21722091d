from typing import Optional
from sqlmodel import SQLModel, Field


class Award(SQLModel, table=True):  # type: ignore[call-arg]
    __tablename__ = "awards"

    id: Optional[str] = Field(default=None, primary_key=True)
    manager_id: Optional[str] = Field(default=None, index=True)
    category: str = Field(index=True, description="Award name, e.g. 'MVP'")
    year: str
