import os

# Settings are read when quicknote.config is imported and have no default credentials
os.environ.setdefault("QUICKNOTE_AUTH_USERNAME", "admin")
os.environ.setdefault("QUICKNOTE_AUTH_PASSWORD", "password")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from quicknote.api import create_app  # noqa: E402
from quicknote.engine import KnowledgeEngine  # noqa: E402
from quicknote.note_store.local import LocalNoteStore  # noqa: E402
from quicknote.search_index.token_index import TokenSearchIndex  # noqa: E402
from tests.fakes import FailingSearchIndex, FakeClock  # noqa: E402


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def note_store(clock: FakeClock) -> LocalNoteStore:
    """In-memory note store driven by the fake clock."""
    return LocalNoteStore(clock=clock)


@pytest.fixture
def search_index() -> FailingSearchIndex:
    return FailingSearchIndex()


@pytest.fixture
def engine(
    note_store: LocalNoteStore, search_index: FailingSearchIndex, clock: FakeClock
) -> KnowledgeEngine:
    return KnowledgeEngine(note_store=note_store, search_index=search_index, clock=clock)


@pytest.fixture
def file_engine(tmp_path, clock: FakeClock) -> KnowledgeEngine:
    """Engine backed by a vault file in a temporary directory."""
    return KnowledgeEngine(
        note_store=LocalNoteStore(tmp_path / "vault.json", clock=clock),
        search_index=TokenSearchIndex(),
        clock=clock,
    )


@pytest.fixture(autouse=True)
def mock_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Override settings for testing."""
    monkeypatch.setattr("quicknote.config.settings.auth_username", "admin")
    monkeypatch.setattr("quicknote.config.settings.auth_password", "password")


@pytest.fixture
def test_client(engine: KnowledgeEngine) -> TestClient:
    """Create test client authenticated with the test credentials."""
    client = TestClient(create_app(engine=engine))
    client.auth = ("admin", "password")
    return client
