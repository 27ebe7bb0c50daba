"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation and self-documenting fields (Field) without coupling the
  core to I/O libraries.
- One serialization path for every beacon's normalized answer.

Note:
- These models describe *what* the information is, not *how* it is obtained.
- A beacon answer is tri-state: `True`, `False` or `None` (unknown). `None`
  means "asked, but no usable answer" and is never folded into `False`.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Optional

from pydantic import BaseModel, Field, StringConstraints
from pydantic.config import ConfigDict

from core.domain.reference import Reference

CHROMOSOMES: tuple[str, ...] = tuple(str(n) for n in range(1, 23)) + ("X", "Y", "MT")

ALLELE_PATTERN = r"^([ACGT]+|D|I)$"

Answer = Optional[bool]

ChromosomeName = Annotated[str, StringConstraints(pattern=r"^([1-9]|1[0-9]|2[0-2]|X|Y|MT)$")]
AlleleCode = Annotated[str, StringConstraints(pattern=ALLELE_PATTERN)]
Position = Annotated[int, Field(ge=0)]


class Query(BaseModel):
    """A normalized beacon query.

    Every field is optional: an invalid input field is carried as `None` so the
    rest of the query can still be dispatched.
    """

    model_config = ConfigDict(frozen=True)

    chromosome: Optional[ChromosomeName] = Field(
        default=None,
        description="Canonical chromosome (1-22, X, Y, MT).",
    )
    position: Optional[Position] = Field(
        default=None,
        description="Position on the chromosome.",
    )
    allele: Optional[AlleleCode] = Field(
        default=None,
        description="Uppercase base sequence, or D (deletion) / I (insertion).",
    )
    reference: Reference | None = Field(
        default=None,
        description="Reference build; None means every build the beacon supports.",
    )

    @property
    def is_complete(self) -> bool:
        return self.chromosome is not None and self.position is not None and self.allele is not None

    def with_reference(self, reference: Reference | None) -> "Query":
        return self.model_copy(update={"reference": reference})


class NormalizedQuery(BaseModel):
    """Output of the normalizer: the query plus field-level diagnostics."""

    model_config = ConfigDict(frozen=True)

    query: Query
    invalid_fields: frozenset[str] = Field(
        default_factory=frozenset,
        description="Input fields that were rejected and set to None.",
    )
    converted_fields: frozenset[str] = Field(
        default_factory=frozenset,
        description="Valid input fields whose canonical value differs from the input.",
    )


class BeaconDescriptor(BaseModel):
    """Static description of a registered beacon (one per adapter)."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, max_length=64)
    name: str = Field(..., min_length=1, max_length=128)
    supported_references: tuple[Reference, ...] = Field(
        ...,
        min_length=1,
        description="Builds the beacon can answer for, in canonical order.",
    )
    sequence_alleles_only: bool = Field(
        default=False,
        description="The beacon cannot express D/I alleles; such queries answer unknown.",
    )

    def supports(self, reference: Reference) -> bool:
        return reference in self.supported_references


class Outcome(str, Enum):
    """How a single (beacon, reference) unit terminated."""

    ANSWERED = "answered"
    MALFORMED_REQUEST = "malformed_request"
    IO_FAILURE = "io_failure"
    TIMEOUT = "timeout"
    ERROR = "error"


class BeaconResponse(BaseModel):
    """Uniform answer of one beacon for one reference."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    beacon_id: str = Field(..., alias="beaconId", min_length=1)
    query: Query
    answer: Answer = Field(
        default=None,
        description="True/False when the beacon answered, None when unknown.",
    )
    outcome: Outcome = Field(
        default=Outcome.ANSWERED,
        description="Diagnostic: how the unit ended. Not part of the outbound record.",
    )
    detail: str | None = Field(
        default=None,
        description="Short failure description when outcome is not `answered`.",
    )

    def to_record(self) -> dict[str, Any]:
        """Flat outbound record: beaconId, chromosome, position, allele, reference, answer."""

        return {
            "beaconId": self.beacon_id,
            "chromosome": self.query.chromosome,
            "position": self.query.position,
            "allele": self.query.allele,
            "reference": self.query.reference.value if self.query.reference else None,
            "answer": self.answer,
        }
