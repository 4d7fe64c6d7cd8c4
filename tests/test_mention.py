"""Tests for labels, spans, mentions and the document model."""

import pytest
from pydantic import ValidationError

from cybertag.document import AnnotatedDocument, LabelStore
from cybertag.labels import CyberLabel, split_label
from cybertag.mention import CyberEntityMention, Span


class TestLabels:
    def test_split_typed_label(self) -> None:
        assert split_label("SW.Product") == ("SW", "Product")
        assert split_label(CyberLabel.VULN_CVE) == ("VULN", "CVE")

    def test_split_keeps_everything_after_first_dot(self) -> None:
        assert split_label("SW.Product.Beta") == ("SW", "Product.Beta")

    @pytest.mark.parametrize("label", ["O", None, "SW", ""])
    def test_non_entity_labels(self, label) -> None:
        assert split_label(label) is None


class TestSpan:
    def test_empty_span_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Span(start=3, end=3)

    def test_expand_covers_gap(self) -> None:
        assert Span(start=1, end=2).expand_to_include(Span(start=4, end=5)).as_tuple() == (1, 5)

    def test_spans_are_frozen(self) -> None:
        span = Span(start=0, end=1)
        with pytest.raises(ValidationError):
            span.end = 4  # type: ignore[misc]

    def test_overlap(self) -> None:
        assert Span(start=0, end=2).overlaps(Span(start=1, end=3))
        assert not Span(start=0, end=1).overlaps(Span(start=1, end=2))
        assert len(Span(start=2, end=5)) == 3


class TestMention:
    def _mention(self, entity_type="SW", subtype="Product") -> CyberEntityMention:
        span = Span(start=0, end=1)
        return CyberEntityMention(sentence_index=0, head=span, extent=span, entity_type=entity_type, subtype=subtype)

    def test_label_equals(self) -> None:
        assert self._mention().label_equals(self._mention())
        assert not self._mention().label_equals(self._mention(subtype="Version"))
        assert self._mention().label_equals(self._mention(subtype="Version"), include_subtype=False)
        assert not self._mention().label_equals(self._mention(entity_type="VULN"))

    def test_label_and_unique_ids(self) -> None:
        first, second = self._mention(), self._mention()
        assert first.label == "SW.Product"
        assert first.mention_id != second.mention_id


class TestDocumentModel:
    def test_from_tagged(self) -> None:
        document = AnnotatedDocument.from_tagged([[("Apple", "NNP"), ("iOS", "NNP")], [("ok", "UH")]])
        assert [s.index for s in document.sentences] == [0, 1]
        assert document.sentences[0].words == ["Apple", "iOS"]
        assert document.sentences[0].labels == [None, None]

    def test_label_stores_are_not_shared(self) -> None:
        document = AnnotatedDocument.from_tagged([[("a", "DT")], [("b", "DT")]])
        document.sentences[0].label_store[0] = CyberLabel.SW_VENDOR
        assert document.sentences[0].labels == ["SW.Vendor"]
        assert document.sentences[1].labels == [None]

    def test_label_store_basics(self) -> None:
        store = LabelStore(2)
        store[1] = "O"
        assert not store.is_set(0)
        assert store.is_set(1)
        assert store.in_range(1) and not store.in_range(2) and not store.in_range(-1)
        store.clear()
        assert list(store) == [None, None]
