"""Pytest fixtures for beacon aggregator tests."""

from __future__ import annotations

from typing import Callable

import pytest

from core.config import AppSettings
from core.domain.models import Query
from core.services.beacon_registry import BeaconRegistry

from tests.fakes import FakeBeacon


@pytest.fixture
def settings() -> AppSettings:
    """Settings isolated from any local .env file."""
    return AppSettings(
        _env_file=None,
        http_timeout_seconds=2.0,
        request_deadline_seconds=2.0,
        max_concurrency=8,
        ucsc_base_url="https://ucsc.beacon.test/query",
        ncbi_base_url="https://ncbi.beacon.test/beacon.cgi",
        cafe_variome_base_url="https://cafe.beacon.test/query",
        kaviar_base_url="https://kaviar.beacon.test/Kaviar.pl",
    )


@pytest.fixture
def make_registry() -> Callable[..., BeaconRegistry]:
    """Factory building a registry from fake beacons, in the given order."""

    def _make(*beacons: FakeBeacon) -> BeaconRegistry:
        return BeaconRegistry(beacons)

    return _make


@pytest.fixture
def brca1_query() -> Query:
    """chr17:41197711 G, no reference."""
    return Query(chromosome="17", position=41197711, allele="G")
