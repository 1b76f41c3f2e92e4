"""
Shared fixtures for the API tests.

Each test gets its own SQLite database file and uploads directory under
``tmp_path``. The application's ``get_db`` and ``get_media_storage``
dependencies are overridden so nothing touches the configured database
or the real uploads folder.
"""

import asyncio
import io
import os
import tempfile

# Settings are read once at import time, so the environment must be
# prepared before the application is imported.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///" + os.path.join(tempfile.gettempdir(), "realty_api_unused.db"))
os.environ.setdefault("UPLOADS_DIR", tempfile.mkdtemp(prefix="realty_uploads_"))
os.environ.setdefault("ROOT_PATH", "http://testserver")
os.environ["DB_CREATE_ALL"] = "false"

import pytest
from fastapi.testclient import TestClient
from PIL import Image
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from realty_api.api.deps import get_media_storage
from realty_api.main import app
from realty_api.models import Base
from realty_api.services.database import enable_sqlite_foreign_keys, get_db
from realty_api.services.media import MediaStorage
from realty_api.utils.text import safe_segment


# =============================================================================
# PYTEST HOOKS
# =============================================================================

def pytest_configure(config):
    config.addinivalue_line("markers", "media: tests that write uploaded files to disk")


# =============================================================================
# HELPERS
# =============================================================================

def image_bytes(color: str = "red", fmt: str = "PNG", size=(32, 24)) -> bytes:
    """Encode a solid color image."""
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format=fmt)
    return buffer.getvalue()


def image_files(field: str = "images", count: int = 1):
    """Multipart ``files`` entries with ``count`` PNG images."""
    return [
        (field, (f"photo{index}.png", image_bytes(), "image/png"))
        for index in range(count)
    ]


def media_path(storage, directory: str, key: str, suffix: str = ""):
    """On-disk path of the media a record with natural key ``key`` owns."""
    return storage.path_for(f"{directory}/{safe_segment(key)}{suffix}")


def url_path(storage, url: str):
    """On-disk path behind a public media URL."""
    return storage.path_for(url.split("/uploads/", 1)[1])


# =============================================================================
# APPLICATION FIXTURES
# =============================================================================

@pytest.fixture
def storage(tmp_path) -> MediaStorage:
    """Media storage rooted in the test's temporary directory."""
    return MediaStorage(tmp_path / "uploads", "http://testserver", quality=80)


@pytest.fixture
def client(tmp_path, storage):
    """TestClient bound to a fresh SQLite database."""
    db_path = tmp_path / "test.db"

    sync_engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(sync_engine)
    sync_engine.dispose()

    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)
    enable_sqlite_foreign_keys(engine)
    session_factory = async_sessionmaker(engine, expire_on_commit=False, autoflush=False)

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_media_storage] = lambda: storage

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    asyncio.run(engine.dispose())


# =============================================================================
# DATA FIXTURES
# =============================================================================

@pytest.fixture
def agent_id(client) -> str:
    response = client.post(
        "/api/agents",
        data={"name": "Sara Khan", "email": "sara@example.com", "phone": "+971500000000"},
        files=image_files("image"),
    )
    assert response.status_code == 201, response.text
    return response.json()["id"]


@pytest.fixture
def property_form(agent_id):
    """Form fields for a valid property."""
    return {
        "title": "Marina Heights",
        "owner": "Emaar",
        "city": "Dubai",
        "country": "UAE",
        "location": "Dubai Marina",
        "category": "Luxury",
        "type": "Apartment",
        "area": "12000",
        "price": "1500000",
        "floors": "40",
        "map_url": "https://maps.example.com/marina",
        "description": "Waterfront tower",
        "agent_id": agent_id,
        "views": ["sea view", "city view"],
        "amenities": "gym, pool",
    }


@pytest.fixture
def property_id(client, property_form) -> str:
    response = client.post("/api/properties", data=property_form, files=image_files(count=2))
    assert response.status_code == 201, response.text
    return response.json()["id"]


@pytest.fixture
def project_id(client, agent_id) -> str:
    response = client.post(
        "/api/projects",
        data={
            "title": "Creek Gardens",
            "owner": "Nakheel",
            "city": "Dubai",
            "country": "UAE",
            "location": "Creek Harbour",
            "category": "Off Plan",
            "map_url": "https://maps.example.com/creek",
            "off_plan": "true",
            "completion_date": "2027-Q4",
            "agent_id": agent_id,
            "amenities": ["kids play area"],
        },
        files=image_files(),
    )
    assert response.status_code == 201, response.text
    return response.json()["id"]


def unit_form(title: str = "Marina Heights 1201", **overrides):
    form = {
        "title": title,
        "type": "Apartment",
        "unit_no": "1201",
        "floor": "12",
        "area": "950",
        "bedrooms": "2",
        "bathrooms": "2",
        "parking_count": "1",
        "description": "Corner unit",
        "views": ["sea view"],
    }
    form.update(overrides)
    return form


@pytest.fixture
def sale_unit_id(client, property_id) -> str:
    response = client.post(
        f"/api/properties/{property_id}/sale-units",
        data=unit_form(rp_sqft="1800", total_price="1710000"),
        files=image_files(),
    )
    assert response.status_code == 201, response.text
    return response.json()["id"]


@pytest.fixture
def rent_unit_id(client, property_id) -> str:
    response = client.post(
        f"/api/properties/{property_id}/rent-units",
        data=unit_form("Marina Heights 905", unit_no="905", floor="9", rent_price="120000"),
        files=image_files(),
    )
    assert response.status_code == 201, response.text
    return response.json()["id"]


@pytest.fixture
def user_id(client) -> str:
    response = client.post(
        "/api/users",
        json={"username": "omar", "email": "omar@example.com", "password": "s3cret!"},
    )
    assert response.status_code == 201, response.text
    return response.json()["id"]
