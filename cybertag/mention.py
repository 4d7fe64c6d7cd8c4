"""Entity mention and span models."""

import uuid

from pydantic import BaseModel, Field, model_validator


class Span(BaseModel, frozen=True):
    """Half-open token-index range ``[start, end)`` within a sentence."""

    start: int = Field(ge=0, description="First token index (inclusive).")
    end: int = Field(ge=1, description="Last token index (exclusive).")

    @model_validator(mode="after")
    def _non_empty(self) -> "Span":
        if self.end <= self.start:
            raise ValueError(f"Span end ({self.end}) must be greater than start ({self.start})")
        return self

    def __len__(self) -> int:
        return self.end - self.start

    def expand_to_include(self, other: "Span") -> "Span":
        """Return the smallest span covering both spans, including any gap between them."""
        return Span(start=min(self.start, other.start), end=max(self.end, other.end))

    def overlaps(self, other: "Span") -> bool:
        return self.start < other.end and other.start < self.end

    def as_tuple(self) -> tuple[int, int]:
        return (self.start, self.end)


def make_unique_id() -> str:
    """Return a fresh mention identifier."""
    return f"cyber:{uuid.uuid4().hex}"


class CyberEntityMention(BaseModel, frozen=True):
    """A contiguous run of tokens sharing one ``Type.Subtype`` label.

    The head span is the part used for matching; the extent covers the full
    mention. The assembler creates both from the same token and grows them
    together.
    """

    mention_id: str = Field(default_factory=make_unique_id, description="Unique mention identifier.")
    sentence_index: int = Field(ge=0, description="Index of the owning sentence.")
    head: Span
    extent: Span
    entity_type: str = Field(description="Label type, e.g. 'SW' or 'VULN'.")
    subtype: str | None = Field(default=None, description="Label subtype, e.g. 'Product' or 'CVE'.")
    value: str | None = Field(default=None, description="Normalized value, if any.")
    text: str = Field(default="", description="Words covered by the head span.")

    @property
    def label(self) -> str:
        if self.subtype is None:
            return self.entity_type
        return f"{self.entity_type}.{self.subtype}"

    def label_equals(self, other: "CyberEntityMention", include_subtype: bool = True) -> bool:
        """True if both mentions carry the same type (and subtype when asked)."""
        if self.entity_type != other.entity_type:
            return False
        return not include_subtype or self.subtype == other.subtype
