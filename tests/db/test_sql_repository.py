"""Unit tests for src/db/sql_repository.py"""

from typing import Callable

from sqlalchemy.orm import Session

from src.core.models import Game, Hole, Player, UserModel
from src.core.shared_types import AccountType, ErrorKind
from src.db.schema import Base
from src.db.sql_repository import SQLGameRepository, SQLUserRepository


def test_save_and_fetch_game(db_session_repo: Session, game: Game) -> None:
    """Round trip: what comes out of the store equals what went in, players and holes included."""
    repo = SQLGameRepository(db_session_repo)
    assert repo.save(game)

    found = repo.fetch(game.id)
    assert found.ok
    assert isinstance(found.value, Game)
    assert found.value == game
    assert [player.total_strokes for player in found.value.players] == [9, 10]


def test_fetch_unknown_game(db_session_repo: Session, game: Game) -> None:
    """
    Should report NOT_FOUND if ID does not match anything in database.

    NOTE with an empty database, any id is a valid test case.
    """
    repo = SQLGameRepository(db_session_repo)
    found = repo.fetch("unknown")
    assert not found
    assert found.error is ErrorKind.NOT_FOUND
    assert found.value is None

    # Now do it with a stored game, but retrieving from the wrong ID
    repo.save(game)
    assert repo.fetch("wrong-id").error is ErrorKind.NOT_FOUND


def test_save_overwrites_game_with_same_id(db_session_repo: Session, game_factory: Callable[..., Game]) -> None:
    """Saving again under the same id updates the record, including removed players and changed strokes."""
    repo = SQLGameRepository(db_session_repo)
    original = game_factory("game_1", completed=False)
    other = game_factory("game_2")
    repo.save(original)
    repo.save(other)

    updated = game_factory("game_1", completed=True)
    updated.players = updated.players[:1]
    updated.players[0].holes[0].strokes = 1
    assert repo.save(updated)

    assert repo.fetch("game_1").value == updated
    # the other record is untouched
    assert repo.fetch("game_2").value == other


def test_consecutive_game_updates(db_session_repo: Session, game_factory: Callable[..., Game]) -> None:
    """Tests that we can successfully make multiple updates to the same game (loosely simulate a round being played)."""
    repo = SQLGameRepository(db_session_repo)
    game = game_factory("game_1", players=[], completed=False)
    repo.save(game)

    player = Player(id="p1", user_id="user_1", name="Garrett")
    game.players.append(player)
    repo.save(game)

    for number in range(1, 4):
        player.holes.append(Hole(id=f"h{number}", number=number, strokes=number + 1))
        repo.save(game)

    game.completed = True
    repo.save(game)

    after_all_updates = repo.fetch("game_1").value
    assert after_all_updates == game
    assert [hole.number for hole in after_all_updates.players[0].holes] == [1, 2, 3]


def test_save_reports_failure_instead_of_raising(db_session_repo: Session, game: Game) -> None:
    """A broken store (here: missing tables) turns into a failed Result."""
    Base.metadata.drop_all(bind=db_session_repo.get_bind())
    repo = SQLGameRepository(db_session_repo)

    saved = repo.save(game)
    assert not saved
    assert saved.error is ErrorKind.PERSISTENCE
    assert repo.fetch(game.id).error is ErrorKind.PERSISTENCE


def test_save_all_stores_every_game(db_session_repo: Session, game_factory: Callable[..., Game]) -> None:
    repo = SQLGameRepository(db_session_repo)
    games = [game_factory(f"game_{i}") for i in range(5)]
    assert repo.save_all(games)
    for game in games:
        assert repo.fetch(game.id).value == game


def test_save_all_is_all_or_nothing(db_session_repo: Session, game_factory: Callable[..., Game]) -> None:
    """One invalid record (no host) makes the whole transaction fail: the valid game is not stored either."""
    repo = SQLGameRepository(db_session_repo)
    valid = game_factory("valid")
    invalid = game_factory("invalid", host_user_id=None)

    result = repo.save_all([valid, invalid])
    assert not result
    assert result.error is ErrorKind.PERSISTENCE
    assert repo.fetch("valid").error is ErrorKind.NOT_FOUND

    # session is usable again after the rollback
    assert repo.save(valid)


def test_save_all_empty(db_session_repo: Session) -> None:
    assert SQLGameRepository(db_session_repo).save_all([])


def test_fetch_all_filters_by_id(db_session_repo: Session, game_factory: Callable[..., Game]) -> None:
    repo = SQLGameRepository(db_session_repo)
    repo.save_all([game_factory(f"game_{i}") for i in range(4)])

    found = repo.fetch_all(["game_3", "game_1", "missing"])
    assert found.ok
    assert sorted(game.id for game in found.value) == ["game_1", "game_3"]


def test_fetch_all_empty_ids(db_session_repo: Session, game: Game) -> None:
    repo = SQLGameRepository(db_session_repo)
    repo.save(game)
    found = repo.fetch_all([])
    assert found.ok
    assert found.value == []


def test_delete_game(db_session_repo: Session, game: Game) -> None:
    """Record of the game should no longer exist after deletion, players and holes go with it."""
    repo = SQLGameRepository(db_session_repo)
    repo.save(game)

    assert repo.delete(game.id)
    assert repo.fetch(game.id).error is ErrorKind.NOT_FOUND


def test_attempt_deleting_unknown_game(db_session_repo: Session) -> None:
    deleted = SQLGameRepository(db_session_repo).delete("unknown")
    assert not deleted
    assert deleted.error is ErrorKind.NOT_FOUND


def test_delete_all(db_session_repo: Session, game_factory: Callable[..., Game]) -> None:
    repo = SQLGameRepository(db_session_repo)
    repo.save_all([game_factory(f"game_{i}") for i in range(3)])

    assert repo.delete_all(["game_0", "game_2"])
    assert repo.fetch("game_0").error is ErrorKind.NOT_FOUND
    assert repo.fetch("game_1").ok
    assert repo.fetch("game_2").error is ErrorKind.NOT_FOUND


def test_delete_all_keeps_going_after_a_failure(db_session_repo: Session, game_factory: Callable[..., Game]) -> None:
    """A missing id fails the batch, but the ids after it are still deleted."""
    repo = SQLGameRepository(db_session_repo)
    repo.save_all([game_factory("game_0"), game_factory("game_1")])

    result = repo.delete_all(["game_0", "missing", "game_1"])
    assert not result
    assert repo.fetch("game_0").error is ErrorKind.NOT_FOUND
    assert repo.fetch("game_1").error is ErrorKind.NOT_FOUND


def test_delete_all_empty(db_session_repo: Session) -> None:
    assert SQLGameRepository(db_session_repo).delete_all([])


# -- Guest games --
def _user(google_id: str, game_ids: list[str]) -> UserModel:
    return UserModel(
        google_id=google_id,
        name=google_id,
        account_type=AccountType.GOOGLE,
        game_ids=game_ids,
    )


def test_fetch_orphaned_guest_game(db_session_repo: Session, game_factory: Callable[..., Game]) -> None:
    """No user lists the guest game, so it is handed back."""
    repo = SQLGameRepository(db_session_repo)
    guest_game = game_factory("guest_game", host_user_id="guest-1234")
    repo.save_all([game_factory("hosted"), guest_game])
    SQLUserRepository(db_session_repo).save(_user("user_1", ["hosted"]))

    found = repo.fetch_guest_game()
    assert found.ok
    assert found.value == guest_game


def test_fetch_guest_game_referenced_by_a_user(db_session_repo: Session, game_factory: Callable[..., Game]) -> None:
    """Once a user has claimed the guest game it is no longer orphaned."""
    repo = SQLGameRepository(db_session_repo)
    repo.save(game_factory("guest_game", host_user_id="guest-1234"))
    users = SQLUserRepository(db_session_repo)
    users.save(_user("user_1", []))
    users.save(_user("user_2", ["other", "guest_game"]))

    found = repo.fetch_guest_game()
    assert not found
    assert found.error is ErrorKind.NOT_FOUND


def test_fetch_guest_game_without_guest_game(db_session_repo: Session, game: Game) -> None:
    repo = SQLGameRepository(db_session_repo)
    repo.save(game)
    assert repo.fetch_guest_game().error is ErrorKind.NOT_FOUND


def test_delete_guest_game_ignores_references(db_session_repo: Session, game_factory: Callable[..., Game]) -> None:
    """delete_guest_game matches on the host id only, a user referencing the game does not protect it."""
    repo = SQLGameRepository(db_session_repo)
    repo.save_all([game_factory("guest_game", host_user_id="guest"), game_factory("hosted")])
    SQLUserRepository(db_session_repo).save(_user("user_1", ["guest_game"]))

    assert repo.delete_guest_game()
    assert repo.fetch("guest_game").error is ErrorKind.NOT_FOUND
    assert repo.fetch("hosted").ok

    # nothing left to delete
    assert repo.delete_guest_game().error is ErrorKind.NOT_FOUND


def test_guest_marker_is_case_sensitive(db_session_repo: Session, game_factory: Callable[..., Game]) -> None:
    """Only a lowercase "guest" in the host id marks a guest game."""
    repo = SQLGameRepository(db_session_repo)
    repo.save_all([game_factory("capitalised", host_user_id="Guest-1"), game_factory("shouting", host_user_id="GUEST")])

    assert repo.fetch_guest_game().error is ErrorKind.NOT_FOUND
    assert repo.delete_guest_game().error is ErrorKind.NOT_FOUND
    assert repo.fetch("capitalised").ok
    assert repo.fetch("shouting").ok


# -- Users --
def test_user_round_trip(db_session_repo: Session) -> None:
    users = SQLUserRepository(db_session_repo)
    user = _user("user_1", ["game_1", "game_2"])
    user.admin_courses = ["central-park-1a2b3c4d"]
    assert users.save(user)

    found = users.fetch("user_1")
    assert found.ok
    assert found.value == user

    user.game_ids.append("game_3")
    users.save(user)
    assert users.fetch("user_1").value.game_ids == ["game_1", "game_2", "game_3"]


def test_fetch_and_delete_users(db_session_repo: Session) -> None:
    users = SQLUserRepository(db_session_repo)
    users.save(_user("user_1", []))
    users.save(_user("user_2", []))

    assert sorted(user.google_id for user in users.fetch_all_users().value) == ["user_1", "user_2"]
    assert users.delete("user_1")
    assert users.fetch("user_1").error is ErrorKind.NOT_FOUND
    assert users.delete("user_1").error is ErrorKind.NOT_FOUND
