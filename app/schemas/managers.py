from typing import Optional
from datetime import datetime
from sqlmodel import SQLModel, Field


class Manager(SQLModel, table=True):  # type: ignore[call-arg]
    __tablename__ = "managers"

    id: Optional[str] = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    image_url: Optional[str] = Field(default=None)
    bio: Optional[str] = Field(default=None)
    # NULL is treated as active by every consumer
    is_active: Optional[bool] = Field(default=True)

    created_at: datetime = Field(default_factory=datetime.utcnow)
