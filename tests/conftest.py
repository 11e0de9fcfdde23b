import sys, os, pytest, pytest_asyncio, httpx
from httpx import ASGITransport

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from database import build_engine, build_session_factory
from main import create_app
from utils.notification_center import AuthorizationStatus, LocalNotificationCenter, grant_prompt
from utils.prospect_repository import ProspectRepository


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'prospects.db'}"


@pytest.fixture
def repository(database_url):
    """Repository auf einer frischen SQLite-Datei."""
    engine = build_engine(database_url)
    repo = ProspectRepository(engine, build_session_factory(engine))
    repo.create_schema()
    yield repo
    engine.dispose()


@pytest.fixture
def notification_center():
    return LocalNotificationCenter(status=AuthorizationStatus.NOT_DETERMINED, prompt=grant_prompt)


@pytest_asyncio.fixture
async def client(database_url, notification_center):
    """Erstellt einen funktionierenden Testclient."""
    app = create_app(database_url=database_url, notification_center=notification_center)
    transport = ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
