"""Beacon providers (concrete adapters).

Why a package:
- One module per provider, each with its own request scheme and grammar.
- Every module implements `core.interfaces.beacon.BeaconAdapter`.
"""

from adapters.beacon_sources.cafe_variome import CafeVariomeBeacon
from adapters.beacon_sources.kaviar import KaviarBeacon
from adapters.beacon_sources.ncbi import NcbiBeacon
from adapters.beacon_sources.ucsc import UcscBeacon

__all__ = [
	"CafeVariomeBeacon",
	"KaviarBeacon",
	"NcbiBeacon",
	"UcscBeacon",
]
