"""Tests for the concrete beacon adapters (no network).

Request builders and parsers are pure and tested directly; `execute` runs
against `httpx.MockTransport`.
"""

from __future__ import annotations

import httpx
import pytest

from adapters.beacon_sources import CafeVariomeBeacon, KaviarBeacon, NcbiBeacon, UcscBeacon
from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.models import Query
from core.domain.reference import Reference
from core.errors import MalformedRequestError
from core.interfaces.beacon import BeaconAdapter
from core.services.beacon_registry import BeaconRegistry

KAVIAR_FOUND = """
<html><body>
<h2>Kaviar results</h2>
<table class="results">
  <tr><th>Position</th><th>Allele</th><th>AC</th><th>AF</th></tr>
  <tr><td>chr17:41197711</td><td>G</td><td>1,204</td><td>0.0123</td></tr>
</table>
</body></html>
"""

KAVIAR_ZERO = """
<html><body><table>
  <tr><th>Position</th><th>Allele</th><th>AC</th></tr>
  <tr><td>chr17:41197711</td><td>G</td><td>0</td></tr>
</table></body></html>
"""

KAVIAR_OTHER_ALLELE = """
<html><body><table>
  <tr><th>Position</th><th>Allele</th><th>AC</th></tr>
  <tr><td>chr17:41197711</td><td>A</td><td>57</td></tr>
</table></body></html>
"""

KAVIAR_MIXED = """
<html><body><table>
  <tr><th>Position</th><th>Allele</th><th>AC</th></tr>
  <tr><td>chr17:41197711</td><td>A</td><td>57</td></tr>
  <tr><td>chr17:41197711</td><td>g</td><td>3</td></tr>
</table></body></html>
"""

KAVIAR_EMPTY_TABLE = """
<html><body><table>
  <tr><th>Position</th><th>Allele</th><th>AC</th></tr>
</table></body></html>
"""

KAVIAR_NONE = "<html><body><p>No variants found for chr1:1:A</p></body></html>"

KAVIAR_MAINTENANCE = "<html><body><h1>Down for maintenance</h1><table><tr><td>menu</td></tr></table></body></html>"


@pytest.fixture
def ucsc(settings: AppSettings) -> UcscBeacon:
    return UcscBeacon(settings)


@pytest.fixture
def ncbi(settings: AppSettings) -> NcbiBeacon:
    return NcbiBeacon(settings)


@pytest.fixture
def cafe(settings: AppSettings) -> CafeVariomeBeacon:
    return CafeVariomeBeacon(settings)


@pytest.fixture
def kaviar(settings: AppSettings) -> KaviarBeacon:
    return KaviarBeacon(settings)


class TestContract:
    """Every shipped adapter satisfies the protocol."""

    def test_protocol(self, ucsc: UcscBeacon, ncbi: NcbiBeacon, cafe: CafeVariomeBeacon, kaviar: KaviarBeacon) -> None:
        for adapter in (ucsc, ncbi, cafe, kaviar):
            assert isinstance(adapter, BeaconAdapter)
            assert adapter.supported_references() == adapter.descriptor.supported_references

    @pytest.mark.parametrize("allele", ["D", "I"])
    def test_sequence_only_beacons_reject_structural_alleles(
        self,
        allele: str,
        ucsc: UcscBeacon,
        cafe: CafeVariomeBeacon,
        kaviar: KaviarBeacon,
    ) -> None:
        query = Query(chromosome="17", position=41197711, allele=allele)
        for adapter in (ucsc, cafe, kaviar):
            with pytest.raises(MalformedRequestError):
                adapter.build_request(query, Reference.HG19)

    def test_missing_fields_are_malformed(self, ncbi: NcbiBeacon) -> None:
        with pytest.raises(MalformedRequestError) as excinfo:
            ncbi.build_request(Query(position=10, allele="A"), Reference.HG19)
        assert "chromosome" in excinfo.value.reason

    def test_unsupported_reference_is_malformed(self, ucsc: UcscBeacon, brca1_query: Query) -> None:
        with pytest.raises(MalformedRequestError):
            ucsc.build_request(brca1_query, Reference.HG38)


class TestUcscBeacon:
    def test_build_request(self, ucsc: UcscBeacon, brca1_query: Query) -> None:
        request = ucsc.build_request(brca1_query, Reference.HG19)

        assert request.method == "GET"
        assert request.url.host == "ucsc.beacon.test"
        assert request.url.params["chrom"] == "chr17"
        assert request.url.params["pos"] == "41197711"
        assert request.url.params["allele"] == "G"
        assert request.url.params["track"] == "lovd"

    def test_track_is_the_beacon_id(self, settings: AppSettings) -> None:
        clinvar = UcscBeacon(settings, track="clinvar")
        lovd = UcscBeacon(settings, track="lovd")

        assert (clinvar.descriptor.id, lovd.descriptor.id) == ("clinvar", "lovd")
        assert BeaconRegistry([clinvar, lovd]).ids() == ("clinvar", "lovd")
        request = clinvar.build_request(Query(chromosome="1", position=808922, allele="A"), Reference.HG19)
        assert request.url.params["track"] == "clinvar"

    @pytest.mark.parametrize(("raw", "expected"), [("Yes", True), ("No\n", False), ("", None), ("Error: no such track", None)])
    def test_parse_response(self, ucsc: UcscBeacon, brca1_query: Query, raw: str, expected: bool | None) -> None:
        assert ucsc.parse_response(raw, brca1_query) is expected


class TestNcbiBeacon:
    def test_assembly_per_reference(self, ncbi: NcbiBeacon, brca1_query: Query) -> None:
        assert ncbi.build_request(brca1_query, Reference.HG19).url.params["assembly"] == "GRCh37"
        assert ncbi.build_request(brca1_query, Reference.HG38).url.params["assembly"] == "GRCh38"

    def test_structural_allele_supported(self, ncbi: NcbiBeacon) -> None:
        request = ncbi.build_request(Query(chromosome="22", position=17213590, allele="D"), Reference.HG19)
        assert request.url.params["allele"] == "D"

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ('{"response": {"exist_gt": 2}}', True),
            ('{"response": {"exist_gt": 0}}', False),
            ('{"count": 5}', True),
            ('{"error": "bad chrom", "count": 0}', None),
            ("<html>oops</html>", None),
        ],
    )
    def test_parse_response(self, ncbi: NcbiBeacon, brca1_query: Query, raw: str, expected: bool | None) -> None:
        assert ncbi.parse_response(raw, brca1_query) is expected


class TestCafeVariomeBeacon:
    def test_build_request(self, cafe: CafeVariomeBeacon) -> None:
        query = Query(chromosome="2", position=179612320, allele="T")
        request = cafe.build_request(query, Reference.HG19)

        assert request.url.params["ref"] == "hg19"
        assert request.url.params["chrom"] == "2"
        assert request.url.params["beacon"] == "central"

    def test_sources_are_separate_beacons(self, settings: AppSettings) -> None:
        cardiokit = CafeVariomeBeacon(settings, source="cardiokit")
        query = Query(chromosome="2", position=179393690, allele="T")

        assert cardiokit.descriptor.id == "cafe-cardiokit"
        assert cardiokit.build_request(query, Reference.HG19).url.params["beacon"] == "cardiokit"

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ('{"response": "yes"}', True),
            ('{"response": "No"}', False),
            ('{"response": {"exists": true}}', True),
            ('{"response": {"exists": null}}', None),
            ('{"response": "error"}', None),
            ("not json", None),
        ],
    )
    def test_parse_response(self, cafe: CafeVariomeBeacon, brca1_query: Query, raw: str, expected: bool | None) -> None:
        assert cafe.parse_response(raw, brca1_query) is expected


class TestKaviarBeacon:
    def test_build_request(self, kaviar: KaviarBeacon, brca1_query: Query) -> None:
        request = kaviar.build_request(brca1_query, Reference.HG19)

        assert request.url.params["variants"] == "chr17:41197711:G"
        assert request.url.params["frz"] == "hg19"

    def test_count_above_zero_is_found(self, kaviar: KaviarBeacon, brca1_query: Query) -> None:
        assert kaviar.parse_response(KAVIAR_FOUND, brca1_query) is True

    def test_zero_count_is_not_found(self, kaviar: KaviarBeacon, brca1_query: Query) -> None:
        assert kaviar.parse_response(KAVIAR_ZERO, brca1_query) is False

    def test_other_allele_at_position_is_not_found(self, kaviar: KaviarBeacon, brca1_query: Query) -> None:
        assert kaviar.parse_response(KAVIAR_OTHER_ALLELE, brca1_query) is False

    def test_queried_allele_among_others(self, kaviar: KaviarBeacon, brca1_query: Query) -> None:
        assert kaviar.parse_response(KAVIAR_MIXED, brca1_query) is True
        other = Query(chromosome="17", position=41197711, allele="T")
        assert kaviar.parse_response(KAVIAR_MIXED, other) is False

    def test_no_variants_notice(self, kaviar: KaviarBeacon, brca1_query: Query) -> None:
        assert kaviar.parse_response(KAVIAR_NONE, brca1_query) is False

    def test_empty_results_table_is_unknown(self, kaviar: KaviarBeacon, brca1_query: Query) -> None:
        assert kaviar.parse_response(KAVIAR_EMPTY_TABLE, brca1_query) is None

    def test_unrelated_page_is_unknown(self, kaviar: KaviarBeacon, brca1_query: Query) -> None:
        assert kaviar.parse_response(KAVIAR_MAINTENANCE, brca1_query) is None
        assert kaviar.parse_response("", brca1_query) is None


class TestExecute:
    """`execute` over a mocked transport."""

    @pytest.mark.asyncio
    async def test_returns_body(self, settings: AppSettings, ucsc: UcscBeacon, brca1_query: Query) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, text="Yes")

        request = ucsc.build_request(brca1_query, Reference.HG19)
        async with build_async_client(settings, transport=httpx.MockTransport(handler)) as client:
            raw = await ucsc.execute(client, request)

        assert raw == "Yes"
        assert ucsc.parse_response(raw, brca1_query) is True
        assert seen[0].headers["User-Agent"] == settings.user_agent

    @pytest.mark.asyncio
    async def test_non_2xx_raises_http_error(self, settings: AppSettings, ncbi: NcbiBeacon, brca1_query: Query) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(503, text="busy"))
        request = ncbi.build_request(brca1_query, Reference.HG19)

        async with build_async_client(settings, transport=transport) as client:
            with pytest.raises(httpx.HTTPStatusError):
                await ncbi.execute(client, request)
