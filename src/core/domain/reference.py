"""Reference genome builds.

A beacon answers for a coordinate system (build). Users type builds in many
ways (`hg19`, `GRCh37`, `ncbi37`...), so every alias resolves through a fixed
table to one canonical `Reference`, or to `None` when unknown.
"""

from __future__ import annotations

from enum import Enum


class Reference(str, Enum):
    """Canonical reference genome builds, in canonical order."""

    HG18 = "hg18"
    HG19 = "hg19"
    HG38 = "hg38"

    def aliases(self) -> tuple[str, ...]:
        """Known synonyms (lowercase) that resolve to this build."""

        return tuple(alias for alias, ref in _ALIASES.items() if ref is self)

    @classmethod
    def ordered(cls, references: "set[Reference] | frozenset[Reference] | tuple[Reference, ...]") -> tuple["Reference", ...]:
        """Return `references` in declaration order, without duplicates."""

        wanted = set(references)
        return tuple(ref for ref in cls if ref in wanted)


_ALIASES: dict[str, Reference] = {
    "hg18": Reference.HG18,
    "grch36": Reference.HG18,
    "ncbi36": Reference.HG18,
    "hg19": Reference.HG19,
    "grch37": Reference.HG19,
    "ncbi37": Reference.HG19,
    "hg38": Reference.HG38,
    "grch38": Reference.HG38,
}


def resolve_reference(alias: str | Reference | None) -> Reference | None:
    """Map a build alias (case-insensitive) to its canonical `Reference`."""

    if alias is None:
        return None
    if isinstance(alias, Reference):
        return alias
    return _ALIASES.get(alias.strip().lower())
