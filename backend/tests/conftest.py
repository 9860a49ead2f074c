import httpx
import pytest
import pytest_asyncio

from peerscore.api.deps.caller import get_ledger
from peerscore.clients.authority_gate import AuthorityGate
from peerscore.clients.identity_registry import InMemoryIdentityRegistry
from peerscore.config import DEFAULT_SKILL_NAMES
from peerscore.main import app
from peerscore.repositories.skill_repository import SkillRepository
from peerscore.services.ledger_service import PeerLedger

AUTHORITY = "0xauthority"


@pytest.fixture(autouse=True)
def _set_env(monkeypatch):
    monkeypatch.setenv("AUTHORITY_ADDRESS", AUTHORITY)


@pytest.fixture
def ledger():
    return PeerLedger(
        registry=InMemoryIdentityRegistry(),
        gate=AuthorityGate(AUTHORITY),
        skills=SkillRepository(DEFAULT_SKILL_NAMES),
    )


@pytest_asyncio.fixture
async def api_client(ledger):
    app.dependency_overrides = {get_ledger: lambda: ledger}
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides = {}


@pytest.fixture
def authority_headers():
    return {"X-Caller-Address": AUTHORITY}
