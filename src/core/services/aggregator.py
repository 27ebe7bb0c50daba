"""Beacon aggregation.

Fans a normalized query out to every registered beacon (one asyncio task per
(beacon, reference) pair), joins all of them under a shared deadline and
returns one `BeaconResponse` per pair in a stable order: registration order,
then reference order. A failing beacon only ever produces an `unknown`
answer for its own pairs; nothing raised by an adapter escapes `query`.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.models import Answer, BeaconResponse, Outcome, Query
from core.domain.reference import Reference
from core.errors import MalformedRequestError
from core.interfaces.beacon import BeaconAdapter
from core.services.beacon_registry import BeaconRegistry, build_default_registry
from core.services.query_normalizer import normalize_query

logger = logging.getLogger(__name__)


@dataclass
class AggregateResult:
    """Output of `BeaconAggregator.ask`."""

    responses: list[BeaconResponse]
    invalid_fields: frozenset[str] = frozenset()
    converted_fields: frozenset[str] = frozenset()
    beacon_known: bool = True
    query: Query = field(default_factory=Query)

    def records(self) -> list[dict[str, Any]]:
        return [response.to_record() for response in self.responses]

    def combined_answer(self) -> Answer:
        """Beacon-of-beacons answer: any `True` wins, `False` only if every beacon said no."""

        answers = [response.answer for response in self.responses]
        if any(answer is True for answer in answers):
            return True
        if answers and all(answer is False for answer in answers):
            return False
        return None


class BeaconAggregator:
    """Concurrent dispatcher over a fixed `BeaconRegistry`."""

    def __init__(
        self,
        registry: BeaconRegistry | None = None,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._registry = registry if registry is not None else build_default_registry(self._settings)
        self._transport = transport

    @property
    def registry(self) -> BeaconRegistry:
        return self._registry

    def has_beacon(self, beacon_id: str) -> bool:
        return beacon_id in self._registry

    def plan(
        self,
        query: Query,
        reference: Reference | None = None,
        beacon_id: str | None = None,
    ) -> list[tuple[BeaconAdapter, Reference]]:
        """(adapter, reference) pairs to dispatch, in result order."""

        reference = reference if reference is not None else query.reference

        if beacon_id is not None:
            adapter = self._registry.get(beacon_id)
            adapters = [adapter] if adapter is not None else []
        else:
            adapters = list(self._registry)

        units: list[tuple[BeaconAdapter, Reference]] = []
        for adapter in adapters:
            supported = Reference.ordered(adapter.supported_references())
            if reference is None:
                units.extend((adapter, ref) for ref in supported)
            elif reference in supported:
                units.append((adapter, reference))
        return units

    async def query(
        self,
        query: Query,
        reference: Reference | None = None,
        beacon_id: str | None = None,
    ) -> list[BeaconResponse]:
        """Ask every matching beacon and collect the answers.

        An unknown `beacon_id` or a reference no beacon supports yields an
        empty list; use `has_beacon` to tell the two apart.
        """

        units = self.plan(query, reference=reference, beacon_id=beacon_id)
        if not units:
            logger.debug("No beacon matches (beacon=%s, reference=%s)", beacon_id, reference)
            return []

        loop = asyncio.get_running_loop()
        deadline = loop.time() + self._settings.request_deadline_seconds
        semaphore = asyncio.Semaphore(self._settings.max_concurrency)
        logger.debug("Dispatching %d beacon request(s)", len(units))

        async with build_async_client(self._settings, transport=self._transport) as client:

            async def limited(adapter: BeaconAdapter, unit_query: Query, ref: Reference) -> BeaconResponse:
                async with semaphore:
                    return await self._run_unit(client, adapter, unit_query, ref)

            async def bounded(adapter: BeaconAdapter, ref: Reference) -> BeaconResponse:
                unit_query = query.with_reference(ref)
                remaining = max(0.0, deadline - loop.time())
                try:
                    return await asyncio.wait_for(limited(adapter, unit_query, ref), timeout=remaining)
                except asyncio.TimeoutError:
                    logger.warning("%s (%s): deadline exceeded", adapter.descriptor.id, ref.value)
                    return _unknown(adapter, unit_query, Outcome.TIMEOUT, "deadline exceeded")

            responses = await asyncio.gather(*(bounded(adapter, ref) for adapter, ref in units))

        return list(responses)

    async def ask(
        self,
        chromosome: str | int | None,
        position: str | int | None,
        allele: str | None,
        reference: str | Reference | None = None,
        beacon_id: str | None = None,
    ) -> AggregateResult:
        """Normalize raw input and query the beacons."""

        normalized = normalize_query(chromosome, position, allele, reference)
        if normalized.invalid_fields:
            logger.info("Invalid query field(s): %s", ", ".join(sorted(normalized.invalid_fields)))

        known = beacon_id is None or self.has_beacon(beacon_id)
        responses = await self.query(normalized.query, beacon_id=beacon_id) if known else []
        return AggregateResult(
            responses=responses,
            invalid_fields=normalized.invalid_fields,
            converted_fields=normalized.converted_fields,
            beacon_known=known,
            query=normalized.query,
        )

    async def _run_unit(
        self,
        client: httpx.AsyncClient,
        adapter: BeaconAdapter,
        query: Query,
        reference: Reference,
    ) -> BeaconResponse:
        beacon_id = adapter.descriptor.id

        try:
            request = adapter.build_request(query, reference)
        except MalformedRequestError as exc:
            logger.debug("%s (%s): cannot express query: %s", beacon_id, reference.value, exc.reason)
            return _unknown(adapter, query, Outcome.MALFORMED_REQUEST, exc.reason)
        except Exception as exc:
            logger.exception("%s (%s): request builder raised", beacon_id, reference.value)
            return _unknown(adapter, query, Outcome.ERROR, str(exc) or exc.__class__.__name__)

        try:
            raw = await adapter.execute(client, request)
        except (httpx.TimeoutException, asyncio.TimeoutError) as exc:
            logger.warning("%s (%s): request timed out: %s", beacon_id, reference.value, exc)
            return _unknown(adapter, query, Outcome.TIMEOUT, str(exc) or "timeout")
        except httpx.HTTPError as exc:
            logger.warning("%s (%s): request failed: %s", beacon_id, reference.value, exc)
            return _unknown(adapter, query, Outcome.IO_FAILURE, str(exc) or exc.__class__.__name__)
        except Exception as exc:
            logger.exception("%s (%s): unexpected error while querying", beacon_id, reference.value)
            return _unknown(adapter, query, Outcome.ERROR, str(exc) or exc.__class__.__name__)

        try:
            answer = adapter.parse_response(raw, query)
        except Exception as exc:
            logger.exception("%s (%s): parser raised", beacon_id, reference.value)
            return _unknown(adapter, query, Outcome.ERROR, str(exc) or exc.__class__.__name__)

        if answer is not None and not isinstance(answer, bool):
            logger.error("%s (%s): parser returned %r, expected a bool or None", beacon_id, reference.value, answer)
            return _unknown(adapter, query, Outcome.ERROR, f"invalid answer {answer!r}")

        if answer is None:
            logger.debug("%s (%s): no usable answer in response", beacon_id, reference.value)
        return BeaconResponse(beacon_id=beacon_id, query=query, answer=answer)


def _unknown(adapter: BeaconAdapter, query: Query, outcome: Outcome, detail: str) -> BeaconResponse:
    return BeaconResponse(
        beacon_id=adapter.descriptor.id,
        query=query,
        answer=None,
        outcome=outcome,
        detail=detail,
    )
