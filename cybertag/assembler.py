"""Turn finalized token labels into entity mentions.

Each token whose label has the form ``Type.Subtype`` yields a one-token span.
The span either extends the sentence's most recent mention or starts a new
one, depending on the merge policy:

- `MergePolicy.LEGACY` (default): extend only when the sentence already has
  *more than one* mention and the most recent one carries the same
  type and subtype. With zero or one mention the span is always appended,
  so the second token of a run becomes a separate mention. This reproduces
  the reference behaviour and is kept until reference outputs say
  otherwise.
- `MergePolicy.ADJACENT`: extend whenever the most recent mention carries
  the same type and subtype.

Extension covers any gap between the mention and the new token.
"""

from enum import Enum
from typing import Sequence

from cybertag.document import AnnotatedDocument, Sentence
from cybertag.labels import split_label
from cybertag.logging import setup_logging
from cybertag.mention import CyberEntityMention, Span


class MergePolicy(str, Enum):
    """When a new labeled token extends the previous mention."""

    LEGACY = "legacy"
    ADJACENT = "adjacent"


class EntitySpanAssembler:
    """Build per-sentence mention lists from label sequences."""

    def __init__(self, merge_policy: MergePolicy | str = MergePolicy.LEGACY) -> None:
        self.merge_policy = MergePolicy(merge_policy)
        self.logger = setup_logging()

    def _should_merge(self, mentions: list[CyberEntityMention], candidate: CyberEntityMention) -> bool:
        if not mentions:
            return False
        if self.merge_policy is MergePolicy.LEGACY and len(mentions) <= 1:
            return False
        return mentions[-1].label_equals(candidate, include_subtype=True)

    def assemble(self, sentence: Sentence, labels: Sequence[str | None]) -> list[CyberEntityMention]:
        """Return the mentions for one sentence, left to right.

        Args:
            sentence: The sentence the labels belong to (for index and text).
            labels: One finalized label per token.
        """
        if len(labels) != len(sentence):
            raise ValueError(f"Got {len(labels)} labels for a sentence of {len(sentence)} tokens")

        mentions: list[CyberEntityMention] = []
        for i, label in enumerate(labels):
            parts = split_label(label)
            if parts is None:
                continue
            entity_type, subtype = parts
            span = Span(start=i, end=i + 1)
            candidate = CyberEntityMention(
                sentence_index=sentence.index,
                head=span,
                extent=span,
                entity_type=entity_type,
                subtype=subtype,
                text=sentence.span_text(i, i + 1),
            )

            if self._should_merge(mentions, candidate):
                latest = mentions[-1]
                head = latest.head.expand_to_include(span)
                mentions[-1] = latest.model_copy(
                    update={
                        "head": head,
                        "extent": latest.extent.expand_to_include(span),
                        "text": sentence.span_text(head.start, head.end),
                    }
                )
            else:
                mentions.append(candidate)

        return mentions

    def assemble_document(self, document: AnnotatedDocument) -> dict[int, list[CyberEntityMention]]:
        """Assemble every sentence from its label store and attach the mentions.

        Returns the mention lists keyed by sentence index; sentences without
        mentions are left out of the mapping.
        """
        by_sentence: dict[int, list[CyberEntityMention]] = {}
        for sentence in document.sentences:
            mentions = self.assemble(sentence, sentence.labels)
            sentence.mentions = mentions
            if mentions:
                by_sentence[sentence.index] = mentions
        self.logger.debug(
            {
                "message": f"Assembled mentions for document {document.document_id}",
                "sentences_with_mentions": len(by_sentence),
                "mentions": sum(len(m) for m in by_sentence.values()),
            },
            pprint=True,
        )
        return by_sentence
