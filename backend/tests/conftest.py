import io

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from dashboard.config import settings
from dashboard.database import get_db, get_engine, get_sessionmaker, init_db
from dashboard.main import app
from dashboard.services.auth_service import auth_service
from dashboard.services.image_service import ImageStore
from dashboard.services.seed_service import CUSTOMERS, seed_database
from dashboard.utils.filesystem import ensure_data_dirs


@pytest.fixture
def tmp_data(tmp_path):
    data_path = tmp_path / "TestDashboard"
    ensure_data_dirs(data_path)
    return data_path


@pytest.fixture
def test_db(tmp_data):
    db_path = tmp_data / "db.sqlite"
    init_db(db_path)
    engine = get_engine(db_path)
    TestSession = get_sessionmaker(engine)

    def override_get_db():
        db = TestSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestSession
    app.dependency_overrides.clear()
    engine.dispose()


@pytest.fixture
def db(test_db):
    session = test_db()
    yield session
    session.close()


@pytest.fixture
def seeded(test_db):
    session = test_db()
    try:
        seed_database(session)
    finally:
        session.close()


@pytest.fixture
def image_store(tmp_data):
    return ImageStore(tmp_data / "uploads", "/uploads")


@pytest.fixture
def fresh_auth_service():
    """Reset login sessions for each test."""
    auth_service.clear()
    yield auth_service
    auth_service.clear()


@pytest.fixture
def client(tmp_data, test_db, fresh_auth_service):
    original_data_path = settings.data_path
    settings.data_path = tmp_data
    c = TestClient(app)
    yield c
    settings.data_path = original_data_path


@pytest.fixture
def auth_headers(client, seeded):
    r = client.post("/api/v1/auth/login", json={"email": "user@nextmail.com", "password": "123456"})
    return {"Authorization": f"Bearer {r.json()['token']}"}


@pytest.fixture
def customer_id():
    return CUSTOMERS[0]["id"]


@pytest.fixture
def make_image():
    def _make(fmt: str = "JPEG", size=(8, 6), color=(200, 30, 30)) -> bytes:
        buf = io.BytesIO()
        Image.new("RGB", size, color).save(buf, format=fmt)
        return buf.getvalue()

    return _make
