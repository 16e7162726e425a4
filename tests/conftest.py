import os

os.environ.setdefault('DATABASE_URL', 'sqlite:///:memory:')

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from scheduling_api.database import Base, get_db  # noqa: E402
from scheduling_api.main import app  # noqa: E402


@pytest.fixture
def testing_session_local():
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def db_session(testing_session_local):
    db = testing_session_local()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(testing_session_local, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr('scheduling_api.routes.appointment_routes.ensure_database_ready', lambda: None)

    def override_get_db():
        db = testing_session_local()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
