"""Shared fixtures for form field tests."""

from types import SimpleNamespace

import pytest
from sqlalchemy import Column, ForeignKey, Integer, String, Table, Text, create_engine
from sqlalchemy.orm import declarative_base, relationship, sessionmaker

from formfields.config import get_settings

Base = declarative_base()

article_tags = Table(
    "article_tags",
    Base.metadata,
    Column("article_id", Integer, ForeignKey("articles.id"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tags.id"), primary_key=True),
)


class Tag(Base):
    __tablename__ = "tags"

    id = Column(Integer, primary_key=True)
    title = Column(String(50), nullable=False)


class Gallery(Base):
    __tablename__ = "galleries"

    id = Column(Integer, primary_key=True)
    title = Column(String(50), nullable=False)


class Article(Base):
    __tablename__ = "articles"

    id = Column(Integer, primary_key=True)
    title = Column(String(100), nullable=False)
    topics = Column(Text, nullable=True)
    gallery_id = Column(Integer, ForeignKey("galleries.id"), nullable=True)

    # Relationships
    tags = relationship("Tag", secondary=article_tags)
    gallery = relationship("Gallery")


TOPICS = {"1": "Technology", "2": "Gardening", "3": "Cooking", "4": "Sports"}


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def topics():
    return dict(TOPICS)


@pytest.fixture
def models():
    return SimpleNamespace(Article=Article, Tag=Tag, Gallery=Gallery)


@pytest.fixture
def db_session():
    """In-memory SQLite session seeded with one tag per topic."""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    Session = sessionmaker(bind=engine)
    session = Session()
    for key, title in TOPICS.items():
        session.add(Tag(id=int(key), title=title))
    session.add(Gallery(id=1, title="Main hall"))
    session.commit()

    yield session

    session.close()
    engine.dispose()


@pytest.fixture
def article(db_session):
    record = Article(title="Spring planting")
    record.tags = [db_session.get(Tag, 2)]
    db_session.add(record)
    db_session.commit()
    return record


class FakeRelation:
    """Relation double recording every membership replacement."""

    def __init__(self, ids=None):
        self._ids = list(ids or [])
        self.calls = []

    def ids(self):
        return list(self._ids)

    def replace_membership(self, ids):
        self.calls.append(list(ids))
        self._ids = list(ids)


@pytest.fixture
def fake_relation():
    return FakeRelation
