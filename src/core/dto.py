"""
Transport models for the remote document store.

Field names on the wire are camelCase (hostUserId, numberOfHoles, ...) to stay compatible with documents written by the
mobile clients. Timestamps travel as float seconds since the Unix epoch.
Decoding is backward safe: apart from the keys, every field falls back to a default when a document lacks it.
"""

import time
from typing import Any, Optional, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from src.core.exceptions import EncodingError


class _DocumentModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_document(self) -> dict[str, Any]:
        """Dictionary keyed by wire names, ready to be written to a document."""
        try:
            return self.model_dump(by_alias=True, mode="json")
        except (TypeError, ValueError) as exc:
            raise EncodingError(f"Cannot encode {type(self).__name__}: {exc}") from exc

    @classmethod
    def from_document(cls, data: Optional[dict[str, Any]]) -> Self:
        if data is None:
            raise EncodingError(f"Empty document, cannot decode {cls.__name__}")
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise EncodingError(f"Cannot decode {cls.__name__}: {exc}") from exc


class HoleDTO(_DocumentModel):
    id: str
    number: int
    strokes: int = 0


class LeaderboardEntry(_DocumentModel):
    id: str
    user_id: str = Field(alias="userId")
    name: str
    photo_url: Optional[str] = Field(default=None, alias="photoURL")
    total_strokes: int = Field(alias="totalStrokes")
    email: str


class PlayerDTO(_DocumentModel):
    id: str
    user_id: str = Field(alias="userId")
    name: str
    photo_url: Optional[str] = Field(default=None, alias="photoURL")
    total_strokes: int = Field(default=0, alias="totalStrokes")
    in_game: bool = Field(default=False, alias="inGame")
    holes: list[HoleDTO] = Field(default_factory=list)
    email: Optional[str] = None

    def to_leaderboard_entry(self) -> Optional[LeaderboardEntry]:
        """Only players with an email can be listed on a course leaderboard."""
        if self.email is None:
            return None
        return LeaderboardEntry(
            id=self.id,
            user_id=self.user_id,
            name=self.name,
            photo_url=self.photo_url,
            total_strokes=self.total_strokes,
            email=self.email,
        )


class GameDTO(_DocumentModel):
    id: str
    host_user_id: str = Field(alias="hostUserId")
    date: float = 0
    completed: bool = False
    number_of_holes: int = Field(default=0, alias="numberOfHoles")
    started: bool = False
    dismissed: bool = False
    live: bool = False
    last_updated: float = Field(default=0, alias="lastUpdated")
    course_id: Optional[str] = Field(default=None, alias="courseID")
    players: list[PlayerDTO] = Field(default_factory=list)
    location_name: Optional[str] = Field(default=None, alias="locationName")
    start_time: float = Field(default_factory=time.time, alias="startTime")
    end_time: float = Field(default_factory=time.time, alias="endTime")
