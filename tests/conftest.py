from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from helpers import envelope_payload, raw_item
from storefront.config import StoreConfig


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def config() -> StoreConfig:
    return StoreConfig(app_id="test-app-id", store_name="oak-and-pine", cache_ttl_seconds=900)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def http_session() -> MagicMock:
    session = MagicMock(name="http_session")
    response = MagicMock(name="response")
    response.status_code = 200
    response.json.return_value = envelope_payload([raw_item()])
    session.get.return_value = response
    return session


@pytest.fixture
def finding_client() -> MagicMock:
    client = MagicMock(name="finding_client")
    return client
