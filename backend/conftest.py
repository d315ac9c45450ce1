import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["SEED_MOVIES"] = "false"
os.environ["TMDB_API_KEY"] = ""
os.environ["SECRET_KEY"] = "test-secret"
os.environ.pop("REDIS_URL", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from movier.core.auth import create_access_token
from movier.core.exceptions import UpstreamError
from movier.core.interfaces import MovieCatalogInterface
from movier.core.tmdb_service import get_movie_catalog
from movier.db import Base, get_db
from movier.main import app
from movier.models import Movie, User


class FakeCatalog(MovieCatalogInterface):
    """In-memory external catalog"""

    def __init__(self):
        self.details = {}
        self.search_results = []
        self.detail_calls = []
        self.fail_with = None
        self.before_detail = None

    def search(self, query):
        if self.fail_with:
            raise self.fail_with
        return self.search_results

    def detail(self, external_id):
        self.detail_calls.append(external_id)
        if self.fail_with:
            raise self.fail_with
        if self.before_detail:
            self.before_detail(external_id)
        return self.details[external_id]


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def catalog():
    catalog = FakeCatalog()
    catalog.details[27205] = {
        "id": 27205,
        "title": "Inception",
        "release_date": "2010-07-15",
        "overview": "A thief who steals corporate secrets through dreams.",
        "poster_path": "/inception.jpg",
        "genres": [{"id": 28, "name": "Action"}, {"id": 878, "name": "Science Fiction"}],
    }
    return catalog


@pytest.fixture
def make_user(db):
    def _make_user(username="alice"):
        user = User(username=username, email=f"{username}@example.com", password_hash="not-a-real-hash")
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make_user


@pytest.fixture
def make_movie(db):
    def _make_movie(title="Heat", year=1995, genre="Crime", description=""):
        movie = Movie(title=title, year=year, genre=genre, description=description)
        db.add(movie)
        db.commit()
        db.refresh(movie)
        return movie
    return _make_movie


@pytest.fixture
def client(db, catalog):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_movie_catalog] = lambda: catalog
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def _auth_headers(user):
        token = create_access_token({"sub": str(user.id), "username": user.username})
        return {"Authorization": f"Bearer {token}"}
    return _auth_headers


@pytest.fixture
def upstream_down():
    return UpstreamError("External catalog request failed (503)")
