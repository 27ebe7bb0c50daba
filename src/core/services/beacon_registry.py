"""Beacon registry.

The set of beacons is fixed at start-up and never mutated afterwards, so one
registry instance can be shared by every concurrent query without locking.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from adapters.beacon_sources import CafeVariomeBeacon, KaviarBeacon, NcbiBeacon, UcscBeacon
from core.config import AppSettings
from core.domain.models import BeaconDescriptor
from core.errors import ConfigurationError
from core.interfaces.beacon import BeaconAdapter



class BeaconRegistry:
    """Ordered, read-only mapping of beacon id to adapter."""

    def __init__(self, adapters: Iterable[BeaconAdapter]) -> None:
        by_id: dict[str, BeaconAdapter] = {}
        for adapter in adapters:
            if not isinstance(adapter, BeaconAdapter):
                raise ConfigurationError(f"{adapter!r} does not implement BeaconAdapter")
            beacon_id = adapter.descriptor.id
            if beacon_id in by_id:
                raise ConfigurationError(f"duplicate beacon id: {beacon_id}")
            by_id[beacon_id] = adapter
        self._adapters: Mapping[str, BeaconAdapter] = MappingProxyType(by_id)

    def __iter__(self) -> Iterator[BeaconAdapter]:
        return iter(self._adapters.values())

    def __len__(self) -> int:
        return len(self._adapters)

    def __contains__(self, beacon_id: object) -> bool:
        return beacon_id in self._adapters

    def get(self, beacon_id: str) -> BeaconAdapter | None:
        return self._adapters.get(beacon_id)

    def ids(self) -> tuple[str, ...]:
        return tuple(self._adapters)

    def descriptors(self) -> tuple[BeaconDescriptor, ...]:
        return tuple(adapter.descriptor for adapter in self._adapters.values())


def build_default_registry(settings: AppSettings | None = None) -> BeaconRegistry:
    """Registry of every shipped beacon, wired with `settings`."""

    settings = settings or AppSettings()
    # Registration order is the order of results.
    adapters: list[BeaconAdapter] = [UcscBeacon(settings, track=track) for track in settings.ucsc_tracks]
    adapters.append(NcbiBeacon(settings))
    adapters.extend(CafeVariomeBeacon(settings, source=source) for source in settings.cafe_variome_sources)
    adapters.append(KaviarBeacon(settings))
    return BeaconRegistry(adapters)
