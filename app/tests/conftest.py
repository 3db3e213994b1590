import sys
import pytest
import pytest_asyncio
import httpx
from pathlib import Path
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import sessionmaker

# Fix Python path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from app.tests.test_config import setup_memory_db, TEST_DB_URL

# Must run before the application creates its engine
setup_memory_db()

from app.main import app
from app.database.init_db import get_session, create_engine_for_url
from app.models import Base, Machine

STARTED_AT = "2024-05-01T10:00:00Z"
STOPPED_AT = "2024-05-01T10:05:00Z"

@pytest_asyncio.fixture
async def test_engine():
    """In-memory database with every table created."""
    engine = create_engine_for_url(TEST_DB_URL)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()

@pytest_asyncio.fixture
async def session_factory(test_engine):
    """Session factory bound to the test database."""
    return sessionmaker(
        test_engine,
        expire_on_commit=False,
        class_=AsyncSession
    )

@pytest_asyncio.fixture
async def db_session(session_factory):
    """Return a session for the test database."""
    async with session_factory() as session:
        yield session

@pytest_asyncio.fixture
async def machine(session_factory):
    """A registered machine alerts can reference."""
    async with session_factory() as session:
        machine = Machine(
            machine_id="test-machine",
            ip_address="192.168.1.10",
            version="v1.0.0",
            is_validated=True
        )
        session.add(machine)
        await session.commit()
        return machine

@pytest_asyncio.fixture
async def count_rows(session_factory):
    """Count the rows of a model in a fresh session."""
    async def _count_rows(model):
        async with session_factory() as session:
            result = await session.execute(select(func.count()).select_from(model))
            return result.scalar()

    return _count_rows

@pytest.fixture
def make_alert_payload():
    """Build an alert submission, overriding any top-level field."""
    def _make_alert_payload(machine_id, **overrides):
        payload = {
            "machineId": machine_id,
            "scenario": "crowdsecurity/ssh-bf",
            "bucketId": "twilight-cloud",
            "message": "Ip 1.2.3.4 performed 'crowdsecurity/ssh-bf' (6 events over 30s)",
            "eventCount": 6,
            "startedAt": STARTED_AT,
            "stoppedAt": STOPPED_AT,
            "capacity": 5,
            "leakSpeed": 10,
            "reprocess": False,
            "source": {
                "scope": "ip",
                "value": "1.2.3.4",
                "ip": "1.2.3.4",
                "range": "1.2.3.0/24",
                "as_number": "16276",
                "as_name": "OVH SAS",
                "country": "FR",
                "latitude": 48.8582,
                "longitude": 2.3387
            },
            "events": [
                {"time": "2024-05-01T10:00:01Z", "serialized": "{\"log_type\":\"ssh_failed-auth\",\"user\":\"root\"}"},
                {"time": "2024-05-01T10:00:07Z", "serialized": "{\"log_type\":\"ssh_failed-auth\",\"user\":\"admin\"}"}
            ],
            "metas": [
                {"key": "target_user", "value": "root"}
            ],
            "decisions": [
                {
                    "until": "2024-05-01T14:05:00Z",
                    "scenario": "crowdsecurity/ssh-bf",
                    "decisionType": "ban",
                    "sourceIpStart": 16909060,
                    "sourceIpEnd": 16909060,
                    "sourceValue": "1.2.3.4",
                    "sourceScope": "ip"
                }
            ]
        }
        payload.update(overrides)
        return payload

    return _make_alert_payload

@pytest_asyncio.fixture
async def client(session_factory):
    """HTTP client bound to the app with get_session pointed at the test database."""
    async def _override_get_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = _override_get_session

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client

    app.dependency_overrides.clear()
