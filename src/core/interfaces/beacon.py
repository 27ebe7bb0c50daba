"""Beacon adapter contract.

Why Protocol:
- A structural contract (duck typing) without a rigid hierarchy.
- Concrete providers (UCSC, NCBI, Kaviar...) stay interchangeable and are
  testable without coupling the core to any of them.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import httpx

from core.domain.models import Answer, BeaconDescriptor, Query
from core.domain.reference import Reference


@runtime_checkable
class BeaconAdapter(Protocol):
    """Minimal contract for a beacon provider.

    Design rules:
    - `build_request` and `parse_response` are pure: no I/O, unit-testable on
      canned input.
    - `build_request` raises `MalformedRequestError` when the provider cannot
      express the query. This is an expected outcome, not a bug.
    - `execute` is the only suspension point; it must not swallow
      `httpx.HTTPError` (the caller turns it into an unknown answer).
    - `parse_response` never raises: unexpected grammar returns `None`. It
      gets the query the response answers, for providers whose page lists
      several alleles at a position.
    """

    descriptor: BeaconDescriptor

    def supported_references(self) -> tuple[Reference, ...]:
        ...

    def build_request(self, query: Query, reference: Reference) -> httpx.Request:
        ...

    async def execute(self, client: httpx.AsyncClient, request: httpx.Request) -> str:
        ...

    def parse_response(self, raw: str, query: Query) -> Answer:
        ...
