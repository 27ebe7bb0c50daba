"""Query normalization.

Turns raw user input (strings, as they arrive from a CLI or an HTTP layer)
into a strict `Query`. Each field is validated on its own: an invalid
chromosome does not stop the allele or the reference from being resolved.
Rejected fields become `None` and are listed in `invalid_fields`; accepted
fields whose canonical form differs from the input are listed in
`converted_fields`.
"""

from __future__ import annotations

import re

from core.domain.models import CHROMOSOMES, NormalizedQuery, Query
from core.domain.reference import Reference, resolve_reference

FIELD_CHROMOSOME = "chromosome"
FIELD_POSITION = "position"
FIELD_ALLELE = "allele"
FIELD_REFERENCE = "reference"

STRUCTURAL_ALLELES = frozenset({"D", "I"})

_CHROMOSOME_SET = frozenset(CHROMOSOMES)
_CHROMOSOME_PREFIXES = ("chrom", "chr")
_CHROMOSOME_ALIASES = {"M": "MT"}
_NON_ALNUM = re.compile(r"[^0-9A-Za-z]+")
_SEQUENCE = re.compile(r"^[ACGT]+$")
_DIGITS = re.compile(r"^[0-9]+$")


def normalize_chromosome(raw: str | int | None) -> str | None:
    """Canonical chromosome name (`1`-`22`, `X`, `Y`, `MT`) or `None`.

    Accepts decorated input such as `chr17`, `chrom17`, `Chr-X` or `chrM`.
    """

    if raw is None or isinstance(raw, bool):
        return None
    value = _NON_ALNUM.sub("", str(raw)).lower()
    for prefix in _CHROMOSOME_PREFIXES:
        if value.startswith(prefix):
            value = value[len(prefix):]
            break
    value = value.upper()
    if _DIGITS.match(value):
        value = str(int(value))
    value = _CHROMOSOME_ALIASES.get(value, value)
    return value if value in _CHROMOSOME_SET else None


def normalize_position(raw: str | int | None) -> int | None:
    """Non-negative integer position or `None`."""

    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw if raw >= 0 else None
    value = str(raw).strip()
    if not _DIGITS.match(value):
        return None
    return int(value)


def normalize_allele(raw: str | None) -> str | None:
    """Uppercase base sequence over ACGT, or `D`/`I`; otherwise `None`."""

    if raw is None:
        return None
    value = str(raw).strip().upper()
    if value in STRUCTURAL_ALLELES or _SEQUENCE.match(value):
        return value
    return None


def is_structural_allele(allele: str | None) -> bool:
    return allele in STRUCTURAL_ALLELES


def normalize_query(
    chromosome: str | int | None,
    position: str | int | None,
    allele: str | None,
    reference: str | Reference | None = None,
) -> NormalizedQuery:
    """Validate and canonicalize a raw query.

    A missing or unresolvable reference does not restrict anything: the query
    goes to every build of every beacon. An unresolvable reference is still
    reported in `invalid_fields` so callers can show it.
    """

    invalid: set[str] = set()
    converted: set[str] = set()

    chrom = normalize_chromosome(chromosome)
    if chrom is None:
        invalid.add(FIELD_CHROMOSOME)
    elif str(chromosome).strip() != chrom:
        converted.add(FIELD_CHROMOSOME)

    pos = normalize_position(position)
    if pos is None:
        invalid.add(FIELD_POSITION)
    elif str(position).strip() != str(pos):
        converted.add(FIELD_POSITION)

    norm_allele = normalize_allele(allele)
    if norm_allele is None:
        invalid.add(FIELD_ALLELE)
    elif str(allele).strip() != norm_allele:
        converted.add(FIELD_ALLELE)

    ref: Reference | None = None
    raw_ref = reference.value if isinstance(reference, Reference) else reference
    if raw_ref is not None and raw_ref.strip():
        ref = resolve_reference(raw_ref)
        if ref is None:
            invalid.add(FIELD_REFERENCE)
        elif raw_ref.strip() != ref.value:
            converted.add(FIELD_REFERENCE)

    query = Query(chromosome=chrom, position=pos, allele=norm_allele, reference=ref)
    return NormalizedQuery(
        query=query,
        invalid_fields=frozenset(invalid),
        converted_fields=frozenset(converted),
    )
