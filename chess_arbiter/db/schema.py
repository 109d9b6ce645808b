"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from chess_arbiter.core.shared_types import Status


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGameSession(Base):
    __tablename__ = "game_sessions"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    program_id: Mapped[str] = mapped_column(String(64))
    authority: Mapped[str]
    player_white: Mapped[str]
    player_black: Mapped[str]
    position: Mapped[str]
    turn: Mapped[str]
    status: Mapped[str] = mapped_column(default=Status.ONGOING.value)
    # denormalized from status (for querying only, never read back)
    winner: Mapped[Optional[str]]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
