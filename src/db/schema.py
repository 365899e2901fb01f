"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import JSON, DateTime, ForeignKey, TypeDecorator
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class UTCDateTime(TypeDecorator):
    """
    Store datetimes as naive UTC and hand them back timezone-aware.

    SQLite has no notion of time zones, so without this a datetime comes back naive and no longer compares equal to the one saved.
    """

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    def process_result_value(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is None:
            return None
        return value.replace(tzinfo=timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    __tablename__ = "games"
    id: Mapped[str] = mapped_column(primary_key=True)
    host_user_id: Mapped[str] = mapped_column(index=True)
    date: Mapped[datetime] = mapped_column(UTCDateTime)
    completed: Mapped[bool] = mapped_column(default=False)
    number_of_holes: Mapped[int] = mapped_column(default=18)
    started: Mapped[bool] = mapped_column(default=False)
    dismissed: Mapped[bool] = mapped_column(default=False)
    live: Mapped[bool] = mapped_column(default=False)
    last_updated: Mapped[datetime] = mapped_column(UTCDateTime)
    course_id: Mapped[Optional[str]]
    location_name: Mapped[Optional[str]]
    start_time: Mapped[datetime] = mapped_column(UTCDateTime)
    end_time: Mapped[datetime] = mapped_column(UTCDateTime)
    players: Mapped[list["DBPlayer"]] = relationship(
        back_populates="game",
        cascade="all, delete-orphan",
        order_by="DBPlayer.position",
    )


class DBPlayer(Base):
    __tablename__ = "players"
    id: Mapped[str] = mapped_column(primary_key=True)
    game_id: Mapped[str] = mapped_column(ForeignKey("games.id", ondelete="CASCADE"))
    # keeps players in the order they were added to the game
    position: Mapped[int] = mapped_column(default=0)
    user_id: Mapped[str]
    name: Mapped[str]
    photo_url: Mapped[Optional[str]]
    in_game: Mapped[bool] = mapped_column(default=False)
    email: Mapped[Optional[str]]
    game: Mapped[DBGame] = relationship(back_populates="players")
    holes: Mapped[list["DBHole"]] = relationship(
        back_populates="player",
        cascade="all, delete-orphan",
        order_by="DBHole.position",
    )


class DBHole(Base):
    __tablename__ = "holes"
    id: Mapped[str] = mapped_column(primary_key=True)
    player_id: Mapped[str] = mapped_column(ForeignKey("players.id", ondelete="CASCADE"))
    position: Mapped[int] = mapped_column(default=0)
    number: Mapped[int]
    strokes: Mapped[int] = mapped_column(default=0)
    player: Mapped[DBPlayer] = relationship(back_populates="holes")


class DBUser(Base):
    __tablename__ = "users"
    google_id: Mapped[str] = mapped_column(primary_key=True)
    apple_id: Mapped[Optional[str]]
    name: Mapped[str]
    photo_url: Mapped[Optional[str]]
    email: Mapped[Optional[str]]
    is_pro: Mapped[bool] = mapped_column(default=False)
    game_ids: Mapped[list[str]] = mapped_column(JSON, default=list)
    last_updated: Mapped[datetime] = mapped_column(UTCDateTime)
    account_type: Mapped[str]
    admin_courses: Mapped[list[str]] = mapped_column(JSON, default=list)
