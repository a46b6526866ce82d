"""
Employee API: Test Configuration (conftest.py)
================================================

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session:   AsyncMock session for service unit tests
    ├── sample_employee:   transient Employee ORM object with every column set
    ├── frontend_dir:      temp directory holding a fake built frontend
    ├── app_settings:      Settings pointing at a per-test SQLite file
    ├── app:               create_app(app_settings) with tables created
    └── test_client:       httpx AsyncClient over ASGITransport
"""

import os

# Must be set before employee_api.config builds the default Settings
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test_default.db"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ.pop("NODE_ENV", None)
os.environ.pop("ENVIRONMENT", None)

from datetime import datetime, timezone  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402
from uuid import uuid4  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from employee_api.config import Settings  # noqa: E402
from employee_api.main import create_app  # noqa: E402
from employee_api.models.employee import Employee  # noqa: E402


@pytest.fixture
def mock_db_session():
    """
    A mock AsyncSession (no real database).

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = employee
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.delete = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_employee():
    now = datetime.now(timezone.utc)
    return Employee(
        id=uuid4(),
        name="Ann",
        position="Eng",
        location="NY",
        salary=1000.0,
        date_of_joining=now,
        created_at=now,
        updated_at=now,
    )


@pytest.fixture
def frontend_dir(tmp_path):
    root = tmp_path / "frontend"
    root.mkdir()
    (root / "index.html").write_text("<html><body>employee app</body></html>")
    (root / "main.js").write_text("console.log('employees');")
    return root


@pytest.fixture
def app_settings(tmp_path, frontend_dir):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'employees.db'}",
        environment="development",
        frontend_dir=str(frontend_dir),
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def app(app_settings):
    """
    A fresh application bound to its own SQLite file.

    ASGITransport does not run the lifespan, so the fixture opens the
    database (and creates the tables) itself.
    """
    application = create_app(app_settings)
    await application.state.database.connect()
    yield application
    await application.state.database.dispose()


@pytest_asyncio.fixture
async def test_client(app):
    """
    Usage:
        async def test_health(test_client):
            response = await test_client.get("/api/health")
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def ann_payload():
    return {"name": "Ann", "position": "Eng", "location": "NY", "salary": 1000}
