import contextlib

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from chirpy_backend.api.config import Settings
from chirpy_backend.api.main import create_app, get_db
from chirpy_database.models import Base


@pytest.fixture(scope="session")
def sqlite_url():
    """Fixture to provide a SQLite in-memory database URL for testing."""
    return "sqlite://"


@pytest.fixture(scope="session")
def engine(sqlite_url):
    """Fixture for a persistent in-memory SQLite engine for the test session."""
    return create_engine(
        sqlite_url, connect_args={"check_same_thread": False}, poolclass=StaticPool
    )


@pytest.fixture
def tables(engine):
    """Create tables for a test and drop them afterwards."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session(engine, tables):
    """Provide a SQLAlchemy session for isolated test usage."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def static_root(tmp_path):
    """A directory of static assets served under /app."""
    (tmp_path / "index.html").write_text("<h1>Welcome to Chirpy</h1>")
    (tmp_path / "assets").mkdir()
    (tmp_path / "assets" / "logo.txt").write_text("chirp")
    return tmp_path


@pytest.fixture
def make_client(db_session, static_root):
    """Factory for TestClients over apps built with the given settings."""
    with contextlib.ExitStack() as stack:
        def _make(**overrides):
            options = {"platform": "dev", "filepath_root": str(static_root)}
            options.update(overrides)
            app = create_app(Settings(**options))

            def override_get_db():
                yield db_session

            app.dependency_overrides[get_db] = override_get_db
            return stack.enter_context(TestClient(app))

        yield _make


@pytest.fixture
def client(make_client):
    """Fixture for a TestClient on a dev-platform app."""
    return make_client()


@pytest.fixture
def user_data():
    """Returns default user data for registration."""
    return {"email": "alice@example.com"}


@pytest.fixture
def user_id(client, user_data):
    """Registers the default user and returns its id."""
    r = client.post("/api/users", json=user_data)
    assert r.status_code == 201
    return r.json()["id"]
