"""Token, sentence and document models consumed and produced by the annotator.

Tokenization, sentence splitting and POS tagging happen upstream; this
module only holds their output plus the per-sentence label store that the
annotation pass mutates.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Sequence

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from cybertag.labels import CyberLabel, label_value
from cybertag.mention import CyberEntityMention


class Token(BaseModel, frozen=True):
    """A single token as delivered by the linguistic front end."""

    word: str = Field(description="Token text.")
    pos: str = Field(description="Part-of-speech tag.")


class LabelStore:
    """Mutable label array for one sentence, indexed by token position.

    Entries start unset (None). The store is owned by exactly one
    `Sentence`; windows and rule actions read and write it by reference so
    that rewrites of earlier positions persist.
    """

    def __init__(self, size: int) -> None:
        self._labels: list[str | None] = [None] * size

    def __len__(self) -> int:
        return len(self._labels)

    def __iter__(self) -> Iterator[str | None]:
        return iter(self._labels)

    def __getitem__(self, index: int) -> str | None:
        return self._labels[index]

    def __setitem__(self, index: int, label: str | CyberLabel | None) -> None:
        self._labels[index] = None if label is None else label_value(label)

    def in_range(self, index: int) -> bool:
        return 0 <= index < len(self._labels)

    def is_set(self, index: int) -> bool:
        return self._labels[index] is not None

    def clear(self) -> None:
        self._labels = [None] * len(self._labels)

    def snapshot(self) -> list[str | None]:
        """Return a copy of the current labels."""
        return list(self._labels)


class Sentence(BaseModel):
    """An ordered token sequence with its label store and mentions.

    `labels` and `mentions` are filled in by the annotator.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    index: int = Field(ge=0, description="Stable position of the sentence in its document.")
    tokens: tuple[Token, ...] = Field(description="Tokens in text order.")
    mentions: list[CyberEntityMention] = Field(
        default_factory=list,
        description="Entity mentions found in this sentence, left to right.",
    )

    _store: LabelStore = PrivateAttr()

    def model_post_init(self, context) -> None:
        self._store = LabelStore(len(self.tokens))

    def __len__(self) -> int:
        return len(self.tokens)

    @property
    def label_store(self) -> LabelStore:
        return self._store

    @property
    def labels(self) -> list[str | None]:
        return self._store.snapshot()

    @property
    def words(self) -> list[str]:
        return [t.word for t in self.tokens]

    def span_text(self, start: int, end: int) -> str:
        return " ".join(t.word for t in self.tokens[start:end])

    @classmethod
    def from_tagged(cls, index: int, tagged: Iterable[Sequence[str]]) -> "Sentence":
        """Build a sentence from ``(word, pos)`` pairs."""
        return cls(index=index, tokens=tuple(Token(word=w, pos=p) for w, p in tagged))


class AnnotatedDocument(BaseModel):
    """A document as a sequence of sentences."""

    document_id: str = Field(default="doc", description="Identifier used in log messages.")
    sentences: list[Sentence] = Field(default_factory=list)

    @classmethod
    def from_tagged(
        cls,
        sentences: Iterable[Iterable[Sequence[str]]],
        document_id: str = "doc",
    ) -> "AnnotatedDocument":
        """Build a document from nested ``(word, pos)`` pairs, one list per sentence."""
        return cls(
            document_id=document_id,
            sentences=[Sentence.from_tagged(i, s) for i, s in enumerate(sentences)],
        )

    def mentions_by_sentence(self) -> dict[int, list[CyberEntityMention]]:
        return {s.index: list(s.mentions) for s in self.sentences if s.mentions}
