"""Shared test fixtures."""

from collections.abc import Iterator

import pytest
from loguru import logger

from sparkflow.store import NoteStore
from tests.unit.fakes import FakeClock, FakeStorage


@pytest.fixture(autouse=True)
def _quiet_loguru() -> Iterator[None]:
    """Drop loguru handlers after each test so no sink outlives its stream."""
    yield
    logger.remove()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def storage() -> FakeStorage:
    """Storage holding an empty, valid notes document."""
    return FakeStorage(document=[])


@pytest.fixture
def store(storage: FakeStorage, clock: FakeClock) -> NoteStore:
    """A loaded store with no notes."""
    s = NoteStore(storage, clock=clock)
    s.load()
    return s


@pytest.fixture
def seeded_store(clock: FakeClock) -> NoteStore:
    """A store loaded from missing storage, i.e. holding the demo notes."""
    s = NoteStore(FakeStorage(document=None), clock=clock)
    s.load()
    return s
