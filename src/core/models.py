"""
Boundary layer data model(s).

These objects are what callers hand to (and get back from) the local store.
The remote store works on the DTO projections in src/core/dto.py; Game.to_dto() / Game.from_dto() convert between the two.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Self
from uuid import uuid4

from src.core.dto import GameDTO, HoleDTO, PlayerDTO


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid4())


def to_timestamp(moment: datetime) -> float:
    """Seconds since the Unix epoch. Naive datetimes are taken to be UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.timestamp()


def from_timestamp(seconds: float) -> datetime:
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


@dataclass
class Hole:
    number: int
    strokes: int = 0
    id: str = field(default_factory=new_id)

    def to_dto(self) -> HoleDTO:
        return HoleDTO(id=self.id, number=self.number, strokes=self.strokes)

    @classmethod
    def from_dto(cls, dto: HoleDTO) -> Self:
        return cls(id=dto.id, number=dto.number, strokes=dto.strokes)


@dataclass
class Player:
    user_id: str
    name: str
    id: str = field(default_factory=new_id)
    photo_url: Optional[str] = None
    in_game: bool = False
    holes: list[Hole] = field(default_factory=list)
    email: Optional[str] = None

    @property
    def total_strokes(self) -> int:
        return sum(hole.strokes for hole in self.holes)

    @property
    def incomplete(self) -> bool:
        """A hole without strokes has not been played yet."""
        return any(hole.strokes == 0 for hole in self.holes)

    def to_dto(self) -> PlayerDTO:
        return PlayerDTO(
            id=self.id,
            user_id=self.user_id,
            name=self.name,
            photo_url=self.photo_url,
            total_strokes=self.total_strokes,
            in_game=self.in_game,
            holes=[hole.to_dto() for hole in self.holes],
            email=self.email,
        )

    @classmethod
    def from_dto(cls, dto: PlayerDTO) -> Self:
        return cls(
            id=dto.id,
            user_id=dto.user_id,
            name=dto.name,
            photo_url=dto.photo_url,
            in_game=dto.in_game,
            holes=[Hole.from_dto(hole) for hole in dto.holes],
            email=dto.email,
        )


@dataclass
class Game:
    """A round of mini golf, hosted by one user and played by one or more players."""

    id: str
    host_user_id: str = ""
    date: datetime = field(default_factory=utc_now)
    completed: bool = False
    number_of_holes: int = 18
    started: bool = False
    dismissed: bool = False
    live: bool = False
    last_updated: datetime = field(default_factory=utc_now)
    course_id: Optional[str] = None
    location_name: Optional[str] = None
    start_time: datetime = field(default_factory=utc_now)
    end_time: datetime = field(default_factory=utc_now)
    players: list[Player] = field(default_factory=list)

    @property
    def hole_in_one_last_hole(self) -> bool:
        return any(
            hole.number == 18 and hole.strokes == 1
            for player in self.players
            for hole in player.holes
        )

    def to_dto(self) -> GameDTO:
        return GameDTO(
            id=self.id,
            host_user_id=self.host_user_id,
            date=to_timestamp(self.date),
            completed=self.completed,
            number_of_holes=self.number_of_holes,
            started=self.started,
            dismissed=self.dismissed,
            live=self.live,
            last_updated=to_timestamp(self.last_updated),
            course_id=self.course_id,
            players=[player.to_dto() for player in self.players],
            location_name=self.location_name,
            start_time=to_timestamp(self.start_time),
            end_time=to_timestamp(self.end_time),
        )

    @classmethod
    def from_dto(cls, dto: GameDTO) -> Self:
        return cls(
            id=dto.id,
            host_user_id=dto.host_user_id,
            date=from_timestamp(dto.date),
            completed=dto.completed,
            number_of_holes=dto.number_of_holes,
            started=dto.started,
            dismissed=dto.dismissed,
            live=dto.live,
            last_updated=from_timestamp(dto.last_updated),
            course_id=dto.course_id,
            location_name=dto.location_name,
            start_time=from_timestamp(dto.start_time),
            end_time=from_timestamp(dto.end_time),
            players=[Player.from_dto(player) for player in dto.players],
        )


@dataclass
class UserModel:
    """Account record. Only `game_ids` matters to the game stores (orphaned guest game check)."""

    google_id: str
    name: str
    account_type: str
    apple_id: Optional[str] = None
    photo_url: Optional[str] = None
    email: Optional[str] = None
    is_pro: bool = False
    game_ids: list[str] = field(default_factory=list)
    last_updated: datetime = field(default_factory=utc_now)
    admin_courses: list[str] = field(default_factory=list)
