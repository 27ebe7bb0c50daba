"""Beacon: Cafe Variome.

Implementation:
- GET `?beacon=<source>&chrom=<chrom>&pos=<pos>&allele=<allele>&ref=<build>`.
- One endpoint fronts several Cafe Variome installations (central,
  cardiokit...); each is registered as its own `cafe-<source>` beacon.
- JSON body, either `{"response": "yes"|"no"}` or the newer
  `{"response": {"exists": true|false|null}}`.
"""

from __future__ import annotations

import httpx

from adapters.beacon_sources.common import ensure_expressible
from adapters.http_client import build_get_request, fetch_text
from adapters.response_parsing import parse_json_field
from core.config import AppSettings
from core.domain.models import Answer, BeaconDescriptor, Query
from core.domain.reference import Reference
from core.interfaces.beacon import BeaconAdapter


class CafeVariomeBeacon(BeaconAdapter):
    def __init__(self, settings: AppSettings | None = None, *, source: str = "central") -> None:
        self._settings = settings or AppSettings()
        self._base_url = self._settings.cafe_variome_base_url
        self._source = source
        self.descriptor = BeaconDescriptor(
            id=f"cafe-{source}",
            name=f"Cafe Variome {source.title()}",
            supported_references=(Reference.HG19,),
            sequence_alleles_only=True,
        )

    def supported_references(self) -> tuple[Reference, ...]:
        return self.descriptor.supported_references

    def build_request(self, query: Query, reference: Reference) -> httpx.Request:
        ensure_expressible(self.descriptor, query, reference)
        return build_get_request(
            self._base_url,
            params={
                "beacon": self._source,
                "chrom": query.chromosome,
                "pos": query.position,
                "allele": query.allele,
                "ref": reference.value,
            },
            headers={"Accept": "application/json"},
        )

    async def execute(self, client: httpx.AsyncClient, request: httpx.Request) -> str:
        return await fetch_text(client, request)

    def parse_response(self, raw: str, query: Query) -> Answer:
        return parse_json_field(raw, ("response",), ("response", "exists"), ("exists",))
