"""Core exceptions.

Only two failures are raised on purpose:
- `MalformedRequestError`: an adapter cannot express a query. Expected, it
  ends as an `unknown` answer for that beacon.
- `ConfigurationError`: programmer error at start-up (e.g. duplicate ids).

I/O failures travel as `httpx.HTTPError` / `asyncio.TimeoutError` and are
absorbed by the aggregator.
"""

from __future__ import annotations


class BeaconError(Exception):
    """Base class for beacon aggregator errors."""


class MalformedRequestError(BeaconError):
    """The provider cannot represent this query in its request scheme."""

    def __init__(self, beacon_id: str, reason: str) -> None:
        super().__init__(f"{beacon_id}: {reason}")
        self.beacon_id = beacon_id
        self.reason = reason


class ConfigurationError(BeaconError):
    """Invalid static configuration (registry, settings)."""
