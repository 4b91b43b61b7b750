from typing import List, Optional, Tuple

import pytest

from flashdeck.exceptions import StorageError
from flashdeck.fetchers.base import BaseTranslator
from flashdeck.services import (
    CardStore,
    CooldownGate,
    FlashcardLibrary,
    FolderStore,
    JSONFileRepository,
    MemoryRepository,
)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeTranslator(BaseTranslator):
    """Returns canned translations keyed by (text, source, target)."""

    def __init__(self, responses: Optional[dict] = None, default: str = "translated"):
        self.responses = responses or {}
        self.default = default
        self.calls: List[Tuple[str, str, str]] = []
        self.error: Optional[Exception] = None
        self.closed = False

    async def call(self, text: str, source_code: str, target_code: str) -> str:
        self.calls.append((text, source_code, target_code))
        if self.error is not None:
            raise self.error
        return self.responses.get((text, source_code, target_code), self.default)

    async def close(self) -> None:
        self.closed = True


class FlakyRepository(MemoryRepository):
    """Memory repository whose writes to selected keys can be made to fail."""

    def __init__(self):
        super().__init__()
        self.failing_keys = set()

    def set(self, key: str, value: str) -> None:
        if key in self.failing_keys:
            raise StorageError(f"disk full while writing {key}")
        super().set(key, value)


@pytest.fixture
def repository():
    return MemoryRepository()


@pytest.fixture
def json_repository(tmp_path):
    return JSONFileRepository(str(tmp_path / "data" / "flashdeck.json"))


@pytest.fixture
def flaky_repository():
    return FlakyRepository()


@pytest.fixture
def stores(repository):
    """Card and folder stores wired the way the library wires them."""
    holder = {}
    cards = CardStore(repository, folder_ids=lambda: holder["folders"].ids())
    folders = FolderStore(repository, cards)
    holder["folders"] = folders
    return cards, folders


@pytest.fixture
def card_store(stores):
    return stores[0]


@pytest.fixture
def folder_store(stores):
    return stores[1]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def gate(clock):
    return CooldownGate(cooldown=5.0, clock=clock)


@pytest.fixture
def translator():
    return FakeTranslator()


@pytest.fixture
def library(repository, translator, gate):
    return FlashcardLibrary(repository, translator=translator, gate=gate)
