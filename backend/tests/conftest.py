import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.core.errors import UpstreamError
from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.services.asset_store import AssetStore, get_asset_store

USER_API = "/api/v1/user"


class FakeAssetStore(AssetStore):
    """Records uploads and hands back predictable URLs."""

    def __init__(self):
        self.uploads = []
        self.fail = False

    def upload(self, payload, *, folder, resource_type="image"):
        if self.fail:
            raise UpstreamError("File upload failed")
        self.uploads.append((folder, resource_type, payload.filename))
        return f"https://assets.test/{folder}/{len(self.uploads)}/{payload.filename}"


@pytest.fixture
def engine(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'test.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    yield engine
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
def asset_store():
    return FakeAssetStore()


@pytest.fixture
def client(session_factory, asset_store):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_asset_store] = lambda: asset_store
    yield TestClient(app)
    app.dependency_overrides.clear()


def registration_data(**overrides):
    data = {
        "fullname": "Asha Rao",
        "email": "asha@example.com",
        "phoneNumber": "9876543210",
        "password": "secret123",
        "role": "jobseeker",
    }
    data.update(overrides)
    return data


@pytest.fixture
def register_user(client):
    def _register(files=None, **overrides):
        data = registration_data(**overrides)
        response = client.post(f"{USER_API}/register", data=data, files=files)
        assert response.status_code == 201, response.text
        return data

    return _register


@pytest.fixture
def logged_in_client(client, register_user):
    data = register_user()
    response = client.post(
        f"{USER_API}/login",
        json={"email": data["email"], "password": data["password"], "role": data["role"]},
    )
    assert response.status_code == 200, response.text
    return client
