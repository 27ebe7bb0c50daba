"""Beacon: UCSC Genome Browser.

Implementation:
- GET `?track=<track>&chrom=chr<chrom>&pos=<pos>&allele=<allele>`.
- The body is free text: "Yes" / "No", or an "Error: ..." line.

Notes:
- One UCSC endpoint serves several beacons, one per track (clinvar, uniprot,
  lovd...). The track name is the beacon id.
- Only hg19 tracks are served.
- The query scheme has no notation for D/I alleles.
"""

from __future__ import annotations

import httpx

from adapters.beacon_sources.common import ensure_expressible
from adapters.http_client import build_get_request, fetch_text
from adapters.response_parsing import parse_yes_no
from core.config import AppSettings
from core.domain.models import Answer, BeaconDescriptor, Query
from core.domain.reference import Reference
from core.interfaces.beacon import BeaconAdapter

_TRACK_NAMES = {
    "clinvar": "ClinVar",
    "uniprot": "UniProt",
    "lovd": "LOVD",
}


class UcscBeacon(BeaconAdapter):
    """Genomics Alliance beacon service at UCSC, for one track."""

    def __init__(self, settings: AppSettings | None = None, *, track: str = "lovd") -> None:
        self._settings = settings or AppSettings()
        self._base_url = self._settings.ucsc_base_url
        self._track = track
        self.descriptor = BeaconDescriptor(
            id=track,
            name=f"{_TRACK_NAMES.get(track, track)} (UCSC)",
            supported_references=(Reference.HG19,),
            sequence_alleles_only=True,
        )

    @property
    def track(self) -> str:
        return self._track

    def supported_references(self) -> tuple[Reference, ...]:
        return self.descriptor.supported_references

    def build_request(self, query: Query, reference: Reference) -> httpx.Request:
        ensure_expressible(self.descriptor, query, reference)
        return build_get_request(
            self._base_url,
            params={
                "track": self._track,
                "chrom": f"chr{query.chromosome}",
                "pos": query.position,
                "allele": query.allele,
            },
            headers={"Accept": "text/plain,*/*;q=0.5"},
        )

    async def execute(self, client: httpx.AsyncClient, request: httpx.Request) -> str:
        return await fetch_text(client, request)

    def parse_response(self, raw: str, query: Query) -> Answer:
        text = (raw or "").strip()
        if text.lower().startswith("error"):
            return None
        return parse_yes_no(text)
