from typing import Optional
from datetime import datetime
from sqlmodel import SQLModel, Field


class Trade(SQLModel, table=True):  # type: ignore[call-arg]
    __tablename__ = "trades"

    id: Optional[str] = Field(default=None, primary_key=True)
    date: Optional[datetime] = Field(default=None, index=True)
