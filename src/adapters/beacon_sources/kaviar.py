"""Beacon: Kaviar (HTML).

Implementation:
- GET the variant search page with `variants=chr<chrom>:<pos>:<allele>`.
- Kaviar has no machine-readable answer; the page lists the variants observed
  at the position in a table with an allele column and an allele count
  column ("AC"). A row for the queried allele with AC > 0 means the allele
  was observed. A "No variants found" notice, rows for other alleles only, or
  a zero count for the queried allele are a definite negative.
- Any other page (maintenance banner, error page, empty table) is unknown.
"""

from __future__ import annotations

import re

import httpx
from bs4 import BeautifulSoup

from adapters.beacon_sources.common import ensure_expressible
from adapters.http_client import build_get_request, fetch_text
from core.config import AppSettings
from core.domain.models import Answer, BeaconDescriptor, Query
from core.domain.reference import Reference
from core.interfaces.beacon import BeaconAdapter

_NO_VARIANTS = re.compile(r"no\s+variants?\s+found", re.IGNORECASE)
_COUNT_HEADERS = frozenset({"ac", "count", "allele count"})
_ALLELE_HEADERS = frozenset({"allele", "alt", "alternate allele"})


def _column(header_cells: list[str], labels: frozenset[str]) -> int | None:
    for index, label in enumerate(header_cells):
        if label.strip().lower() in labels:
            return index
    return None


def _parse_count(text: str) -> int | None:
    value = text.strip().replace(",", "")
    return int(value) if value.isdigit() else None


class KaviarBeacon(BeaconAdapter):
    descriptor = BeaconDescriptor(
        id="kaviar",
        name="Kaviar",
        supported_references=(Reference.HG19,),
        sequence_alleles_only=True,
    )

    def __init__(self, settings: AppSettings | None = None) -> None:
        self._settings = settings or AppSettings()
        self._base_url = self._settings.kaviar_base_url

    def supported_references(self) -> tuple[Reference, ...]:
        return self.descriptor.supported_references

    def build_request(self, query: Query, reference: Reference) -> httpx.Request:
        ensure_expressible(self.descriptor, query, reference)
        return build_get_request(
            self._base_url,
            params={
                "frz": reference.value,
                "onebased": 1,
                "variants": f"chr{query.chromosome}:{query.position}:{query.allele}",
                "format": "html",
            },
            headers={"Accept": "text/html"},
        )

    async def execute(self, client: httpx.AsyncClient, request: httpx.Request) -> str:
        return await fetch_text(client, request)

    def parse_response(self, raw: str, query: Query) -> Answer:
        if not raw or query.allele is None:
            return None
        soup = BeautifulSoup(raw, "html.parser")
        if _NO_VARIANTS.search(soup.get_text(" ")):
            return False

        for table in soup.find_all("table"):
            rows = table.find_all("tr")
            if not rows:
                continue
            header = [cell.get_text(" ", strip=True) for cell in rows[0].find_all(["th", "td"])]
            count_column = _column(header, _COUNT_HEADERS)
            allele_column = _column(header, _ALLELE_HEADERS)
            if count_column is None or allele_column is None:
                continue

            width = max(count_column, allele_column)
            data_rows = [row.find_all("td") for row in rows[1:]]
            data_rows = [cells for cells in data_rows if len(cells) > width]
            if not data_rows:
                return None

            counts = [
                _parse_count(cells[count_column].get_text(strip=True))
                for cells in data_rows
                if cells[allele_column].get_text(strip=True).upper() == query.allele
            ]
            if any(count is None for count in counts):
                return None
            # Rows for other alleles only: the position was covered, the allele was not seen.
            return any(count > 0 for count in counts)

        return None
