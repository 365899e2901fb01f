"""
Pytest will auto-discover / import this file called 'conftest.py'. ]
This file defines fixtures/variables required for testing multiple layers.
"""

from datetime import datetime, timezone
from typing import Callable, Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import Settings
from src.core.models import Game, Hole, Player
from src.db.schema import Base

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def settings() -> Settings:
    """Settings independent of the environment the tests run in."""
    return Settings(
        _env_file=None,
        database_url=DATABASE_URL,
        games_collection="games",
        in_query_limit=10,
        batch_limit=500,
        max_workers=4,
    )


def make_game(game_id: str, host_user_id: str = "user_1", **overrides) -> Game:
    """A finished two player game on a 3-hole course (all timestamps at whole seconds, UTC)."""
    moment = datetime(2025, 11, 24, 14, 30, tzinfo=timezone.utc)
    fields = dict(
        id=game_id,
        host_user_id=host_user_id,
        date=moment,
        completed=True,
        number_of_holes=3,
        started=True,
        last_updated=moment,
        course_id="central-park-1a2b3c4d",
        location_name="Central Park",
        start_time=moment,
        end_time=moment.replace(hour=15),
        players=[
            Player(
                id=f"{game_id}-p1",
                user_id=host_user_id,
                name="Garrett",
                email="garrett@example.com",
                holes=[
                    Hole(id=f"{game_id}-p1-h{number}", number=number, strokes=strokes)
                    for number, strokes in [(1, 3), (2, 2), (3, 4)]
                ],
            ),
            Player(
                id=f"{game_id}-p2",
                user_id="user_2",
                name="Sam",
                holes=[
                    Hole(id=f"{game_id}-p2-h{number}", number=number, strokes=strokes)
                    for number, strokes in [(1, 2), (2, 5), (3, 3)]
                ],
            ),
        ],
    )
    fields.update(overrides)
    return Game(**fields)


@pytest.fixture
def game() -> Game:
    return make_game("game_1")


@pytest.fixture
def game_factory() -> Callable[..., Game]:
    return make_game
