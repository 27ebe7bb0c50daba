"""Checks shared by beacon request builders."""

from __future__ import annotations

from core.domain.models import BeaconDescriptor, Query
from core.domain.reference import Reference
from core.errors import MalformedRequestError
from core.services.query_normalizer import is_structural_allele


def ensure_expressible(descriptor: BeaconDescriptor, query: Query, reference: Reference) -> None:
    """Raise `MalformedRequestError` when `descriptor` cannot ask `query` for `reference`."""

    missing = [
        name
        for name, value in (
            ("chromosome", query.chromosome),
            ("position", query.position),
            ("allele", query.allele),
        )
        if value is None
    ]
    if missing:
        raise MalformedRequestError(descriptor.id, f"missing {', '.join(missing)}")
    if not descriptor.supports(reference):
        raise MalformedRequestError(descriptor.id, f"reference {reference.value} not supported")
    if descriptor.sequence_alleles_only and is_structural_allele(query.allele):
        raise MalformedRequestError(descriptor.id, f"allele {query.allele} not supported")
