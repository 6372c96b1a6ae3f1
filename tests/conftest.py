"""
Shared fixtures: a throwaway SQLite message store per test.
"""
from datetime import datetime

import pytest
from sqlalchemy.orm import sessionmaker

from chatstats.core.config import Settings
from chatstats.core.database import Base, build_engine
from chatstats.models.message import Group, Message, MessageContent


def get_test_settings(**overrides) -> Settings:
    """Settings for testing."""
    values = {
        "database_url": "sqlite:///./test_chatstats.db",
        "log_level": "DEBUG",
        "log_format": "text",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def engine(tmp_path):
    """Engine on a fresh database file with the schema applied."""
    engine = build_engine(f"sqlite:///{tmp_path / 'test_chatstats.db'}")
    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_settings():
    return get_test_settings


@pytest.fixture
def settings():
    return get_test_settings()


@pytest.fixture
def add_messages(db):
    """Helper storing ``count`` messages for a group at ``tg_date``."""
    groups = {}

    def _add(group_name: str, tg_date: datetime, count: int = 1) -> None:
        group = groups.get(group_name)
        if group is None:
            group = Group(name=group_name)
            db.add(group)
            groups[group_name] = group
        for i in range(count):
            db.add(Message(
                group=group,
                content=MessageContent(text=f"{group_name} #{i}", tg_date=tg_date),
            ))
        db.commit()

    return _add
