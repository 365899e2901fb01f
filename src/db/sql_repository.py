"""Implementation of (Game)Repository for the on-device store, using SQLAlchemy on top of SQLite"""

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.core.models import Game, Hole, Player, UserModel
from src.core.results import Result
from src.core.shared_types import GUEST_MARKER, ErrorKind
from src.db.schema import DBGame, DBHole, DBPlayer, DBUser

logger = logging.getLogger(__name__)


class SQLGameRepository:
    """Games stored in the local SQL database. Every fault is logged and reported through the returned Result."""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def save(self, game: Game) -> Result[None]:
        """Insert-or-update a single game and commit."""
        try:
            self.db.merge(self._to_db(game))
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Failed to save game %s locally: %s", game.id, exc)
            return Result.failure(ErrorKind.PERSISTENCE, str(exc))
        return Result.success()

    def save_all(self, games: list[Game]) -> Result[None]:
        """All games go into one transaction: either every game is stored or none is."""
        try:
            for game in games:
                self.db.merge(self._to_db(game))
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Failed to save %d games locally: %s", len(games), exc)
            return Result.failure(ErrorKind.PERSISTENCE, str(exc))
        return Result.success()

    def fetch(self, game_id: str) -> Result[Game]:
        try:
            game_db = self._fetch_game(game_id)
        except SQLAlchemyError as exc:
            logger.error("Failed to fetch game %s locally: %s", game_id, exc)
            return Result.failure(ErrorKind.PERSISTENCE, str(exc))
        if game_db is None:
            return Result.failure(ErrorKind.NOT_FOUND, f"Game with {game_id=} not found.")
        return Result.success(self._to_model(game_db))

    def fetch_guest_game(self) -> Result[Game]:
        """
        Find the guest game, but only if it is orphaned.

        The game hosted by a guest is returned only when no user lists it in their game ids.
        Once a user claims the game it is theirs, and this lookup reports NOT_FOUND.
        """
        try:
            guest_db = self._fetch_guest_game()
            if guest_db is None:
                return Result.failure(ErrorKind.NOT_FOUND, "No guest game stored.")

            users = self.db.scalars(select(DBUser)).all()
            is_referenced = any(guest_db.id in (user.game_ids or []) for user in users)
        except SQLAlchemyError as exc:
            logger.error("Failed to fetch guest game locally: %s", exc)
            return Result.failure(ErrorKind.PERSISTENCE, str(exc))

        if is_referenced:
            return Result.failure(
                ErrorKind.NOT_FOUND, f"Guest game {guest_db.id} belongs to a user."
            )
        return Result.success(self._to_model(guest_db))

    def delete_guest_game(self) -> Result[None]:
        """Delete the guest game. Unlike fetch_guest_game, this does not check whether a user references it."""
        try:
            guest_db = self._fetch_guest_game()
            if guest_db is None:
                return Result.failure(ErrorKind.NOT_FOUND, "No guest game stored.")
            self.db.delete(guest_db)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Failed to delete guest game locally: %s", exc)
            return Result.failure(ErrorKind.PERSISTENCE, str(exc))
        return Result.success()

    def fetch_all(self, ids: list[str]) -> Result[list[Game]]:
        """Membership filter over every stored game. The order of the result does not follow ids."""
        wanted = set(ids)
        if not wanted:
            return Result.success([])
        try:
            games_db = self.db.scalars(select(DBGame)).all()
        except SQLAlchemyError as exc:
            logger.error("Failed to fetch games locally: %s", exc)
            return Result.failure(ErrorKind.PERSISTENCE, str(exc))
        return Result.success(
            [self._to_model(game_db) for game_db in games_db if game_db.id in wanted]
        )

    def delete(self, game_id: str) -> Result[None]:
        try:
            game_db = self._fetch_game(game_id)
            if game_db is None:
                return Result.failure(ErrorKind.NOT_FOUND, f"Game with {game_id=} not found.")
            self.db.delete(game_db)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Failed to delete game %s locally: %s", game_id, exc)
            return Result.failure(ErrorKind.PERSISTENCE, str(exc))
        return Result.success()

    def delete_all(self, ids: list[str]) -> Result[None]:
        """
        Delete every id, one after the other, and AND the outcomes.

        SQLite allows a single writer, so the deletes run on this session rather than in parallel.
        A failed delete does not stop the remaining ones.
        """
        return Result.all_ok([self.delete(game_id) for game_id in ids])

    # -- Internal helpers --
    def _fetch_game(self, game_id: str) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == game_id)
        return self.db.scalar(query)

    def _fetch_guest_game(self) -> DBGame | None:
        # instr is case-sensitive, LIKE is not
        query = select(DBGame).where(func.instr(DBGame.host_user_id, GUEST_MARKER) > 0).limit(1)
        return self.db.scalar(query)

    def _to_db(self, game: Game) -> DBGame:
        """Convert data transfer model to SQLAlchemy model."""
        return DBGame(
            id=game.id,
            host_user_id=game.host_user_id,
            date=game.date,
            completed=game.completed,
            number_of_holes=game.number_of_holes,
            started=game.started,
            dismissed=game.dismissed,
            live=game.live,
            last_updated=game.last_updated,
            course_id=game.course_id,
            location_name=game.location_name,
            start_time=game.start_time,
            end_time=game.end_time,
            players=[
                DBPlayer(
                    id=player.id,
                    position=position,
                    user_id=player.user_id,
                    name=player.name,
                    photo_url=player.photo_url,
                    in_game=player.in_game,
                    email=player.email,
                    holes=[
                        DBHole(
                            id=hole.id,
                            position=hole_position,
                            number=hole.number,
                            strokes=hole.strokes,
                        )
                        for hole_position, hole in enumerate(player.holes)
                    ],
                )
                for position, player in enumerate(game.players)
            ],
        )

    def _to_model(self, game_db: DBGame) -> Game:
        """Convert SQLAlchemy model to data transfer model."""
        return Game(
            id=game_db.id,
            host_user_id=game_db.host_user_id,
            date=game_db.date,
            completed=game_db.completed,
            number_of_holes=game_db.number_of_holes,
            started=game_db.started,
            dismissed=game_db.dismissed,
            live=game_db.live,
            last_updated=game_db.last_updated,
            course_id=game_db.course_id,
            location_name=game_db.location_name,
            start_time=game_db.start_time,
            end_time=game_db.end_time,
            players=[
                Player(
                    id=player_db.id,
                    user_id=player_db.user_id,
                    name=player_db.name,
                    photo_url=player_db.photo_url,
                    in_game=player_db.in_game,
                    email=player_db.email,
                    holes=[
                        Hole(id=hole_db.id, number=hole_db.number, strokes=hole_db.strokes)
                        for hole_db in player_db.holes
                    ],
                )
                for player_db in game_db.players
            ],
        )


class SQLUserRepository:
    """Users stored in the local SQL database. Keeps the game ids the guest game lookup checks against."""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def save(self, user: UserModel) -> Result[None]:
        try:
            self.db.merge(
                DBUser(
                    google_id=user.google_id,
                    apple_id=user.apple_id,
                    name=user.name,
                    photo_url=user.photo_url,
                    email=user.email,
                    is_pro=user.is_pro,
                    game_ids=list(user.game_ids),
                    last_updated=user.last_updated,
                    account_type=user.account_type,
                    admin_courses=list(user.admin_courses),
                )
            )
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Failed to save user %s locally: %s", user.google_id, exc)
            return Result.failure(ErrorKind.PERSISTENCE, str(exc))
        return Result.success()

    def fetch(self, google_id: str) -> Result[UserModel]:
        try:
            user_db = self.db.get(DBUser, google_id)
        except SQLAlchemyError as exc:
            logger.error("Failed to fetch user %s locally: %s", google_id, exc)
            return Result.failure(ErrorKind.PERSISTENCE, str(exc))
        if user_db is None:
            return Result.failure(ErrorKind.NOT_FOUND, f"User with {google_id=} not found.")
        return Result.success(self._to_model(user_db))

    def fetch_all_users(self) -> Result[list[UserModel]]:
        try:
            users_db = self.db.scalars(select(DBUser)).all()
        except SQLAlchemyError as exc:
            logger.error("Failed to fetch users locally: %s", exc)
            return Result.failure(ErrorKind.PERSISTENCE, str(exc))
        return Result.success([self._to_model(user_db) for user_db in users_db])

    def delete(self, google_id: str) -> Result[None]:
        try:
            user_db = self.db.get(DBUser, google_id)
            if user_db is None:
                return Result.failure(ErrorKind.NOT_FOUND, f"User with {google_id=} not found.")
            self.db.delete(user_db)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Failed to delete user %s locally: %s", google_id, exc)
            return Result.failure(ErrorKind.PERSISTENCE, str(exc))
        return Result.success()

    def _to_model(self, user_db: DBUser) -> UserModel:
        return UserModel(
            google_id=user_db.google_id,
            apple_id=user_db.apple_id,
            name=user_db.name,
            photo_url=user_db.photo_url,
            email=user_db.email,
            is_pro=user_db.is_pro,
            game_ids=list(user_db.game_ids or []),
            last_updated=user_db.last_updated,
            account_type=user_db.account_type,
            admin_courses=list(user_db.admin_courses or []),
        )
