"""Beacon: NCBI.

Implementation:
- GET with `assembly` set to the GRCh name of the build and `format=json`.
- The answer is a hit count: `{"response": {"exist_gt": <n>}}`. Older
  deployments answer `{"count": <n>}`.

Notes:
- Serves GRCh37 and GRCh38, so a reference-agnostic query produces two
  responses.
- Deletions/insertions are passed through as `D`/`I`.
"""

from __future__ import annotations

import httpx

from adapters.beacon_sources.common import ensure_expressible
from adapters.http_client import build_get_request, fetch_text
from adapters.response_parsing import load_json, parse_json_count
from core.config import AppSettings
from core.domain.models import Answer, BeaconDescriptor, Query
from core.domain.reference import Reference
from core.interfaces.beacon import BeaconAdapter

_ASSEMBLIES: dict[Reference, str] = {
    Reference.HG19: "GRCh37",
    Reference.HG38: "GRCh38",
}


class NcbiBeacon(BeaconAdapter):
    descriptor = BeaconDescriptor(
        id="ncbi",
        name="NCBI",
        supported_references=(Reference.HG19, Reference.HG38),
    )

    def __init__(self, settings: AppSettings | None = None, *, dataset: str = "dbsnp") -> None:
        self._settings = settings or AppSettings()
        self._base_url = self._settings.ncbi_base_url
        self._dataset = dataset

    def supported_references(self) -> tuple[Reference, ...]:
        return self.descriptor.supported_references

    def build_request(self, query: Query, reference: Reference) -> httpx.Request:
        ensure_expressible(self.descriptor, query, reference)
        return build_get_request(
            self._base_url,
            params={
                "dataset": self._dataset,
                "assembly": _ASSEMBLIES[reference],
                "chrom": query.chromosome,
                "pos": query.position,
                "allele": query.allele,
                "format": "json",
            },
            headers={"Accept": "application/json"},
        )

    async def execute(self, client: httpx.AsyncClient, request: httpx.Request) -> str:
        return await fetch_text(client, request)

    def parse_response(self, raw: str, query: Query) -> Answer:
        data = load_json(raw)
        if isinstance(data, dict) and data.get("error"):
            return None
        return parse_json_count(raw, ("response", "exist_gt"), ("count",))
