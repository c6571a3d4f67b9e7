"""
Общие fixtures unit-тестов.
"""

import pytest

from tests.fakes import FakeMarketData, FakeSigner, FakeTransport


@pytest.fixture
def fake_signer():
    return FakeSigner()


@pytest.fixture
def fake_market_data():
    return FakeMarketData()


@pytest.fixture
def fake_transport():
    return FakeTransport()
