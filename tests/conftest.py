import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from gps_tracking.config import Settings
from gps_tracking.main import create_app
from gps_tracking.seed import seed_data

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin123"


@pytest.fixture
def settings_overrides():
    return {}


@pytest.fixture
def settings(tmp_path, settings_overrides):
    values = {
        "database_url": f"sqlite+aiosqlite:///{tmp_path / 'test.sqlite3'}",
        "upload_dir": str(tmp_path / "uploads"),
        "jwt_secret": "test-secret",
        "bcrypt_rounds": 4,
        "seed_admin_username": ADMIN_USERNAME,
        "seed_admin_password": ADMIN_PASSWORD,
    }
    values.update(settings_overrides)
    return Settings(_env_file=None, **values)


@pytest_asyncio.fixture
async def app(settings):
    application = create_app(settings)
    db = application.state.db
    await db.create_tables()
    async with db.session_factory() as session:
        await seed_data(session, settings)
    yield application
    await db.dispose()


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def admin_headers(client):
    response = await client.post(
        "/api/admin/login",
        json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
    )
    return bearer(response.json()["token"])


@pytest_asyncio.fixture
async def company_headers(client):
    await client.post(
        "/api/register",
        json={"companyName": "Fleet Co", "username": "fleetco", "password": "fleet-pw"},
    )
    response = await client.post(
        "/api/login",
        json={"username": "fleetco", "password": "fleet-pw"},
    )
    return bearer(response.json()["token"])
