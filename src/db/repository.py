"""Protocol repository, implemented by the on-device SQL store and the remote Firestore store."""

from typing import Protocol, TypeVar, runtime_checkable

from src.core.models import Game
from src.core.results import Result

# Local store hands back Game, remote store hands back GameDTO
RecordT = TypeVar("RecordT", covariant=True)


@runtime_checkable
class GameRepository(Protocol[RecordT]):
    """Persistence layer orchestration. None of these methods raise, faults come back as a failed Result."""

    def save(self, game: Game) -> Result[None]:
        """Insert the game, or overwrite the record with the same id."""
        ...

    def save_all(self, games: list[Game]) -> Result[None]:
        """Store every game. Succeeds only if all of them were stored."""
        ...

    def fetch(self, game_id: str) -> Result[RecordT]:
        """Get game by ID, if record exists."""
        ...

    def fetch_all(self, ids: list[str]) -> Result[list[RecordT]]:
        """Get every game whose id is in ids. Ids without a record are skipped."""
        ...

    def delete(self, game_id: str) -> Result[None]:
        """Remove a game's record."""
        ...

    def delete_all(self, ids: list[str]) -> Result[None]:
        """Remove every listed record. Succeeds only if all of them were removed."""
        ...
