"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import JSON, ForeignKey
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBMatch(Base):
    __tablename__ = "matches"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    variant: Mapped[str]
    mode: Mapped[str]
    status: Mapped[str]
    registered_players: Mapped[dict[str, str]] = mapped_column(JSON)
    current_player_color: Mapped[str]
    winner_color: Mapped[Optional[str]]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)

    # history, oldest first. Rows are only ever appended.
    game_states: Mapped[list["DBGameState"]] = relationship(
        back_populates="match", cascade="all, delete-orphan", order_by="DBGameState.id"
    )
    moves: Mapped[list["DBMove"]] = relationship(
        back_populates="match", cascade="all, delete-orphan", order_by="DBMove.id"
    )


class DBGameState(Base):
    __tablename__ = "game_states"
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    match_id: Mapped[UUID] = mapped_column(ForeignKey("matches.id"))
    board_state: Mapped[list[dict]] = mapped_column(JSON)
    dice: Mapped[list[int]] = mapped_column(JSON, default=list)
    available_moves: Mapped[list[int]] = mapped_column(JSON, default=list)
    turn_number: Mapped[int]
    phase: Mapped[str]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)

    match: Mapped[DBMatch] = relationship(back_populates="game_states")


class DBMove(Base):
    __tablename__ = "moves"
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    match_id: Mapped[UUID] = mapped_column(ForeignKey("matches.id"))
    player_color: Mapped[str]
    from_point: Mapped[int]
    to_point: Mapped[int]
    dice_value: Mapped[int]
    move_type: Mapped[str]
    turn_number: Mapped[int]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)

    match: Mapped[DBMatch] = relationship(back_populates="moves")
