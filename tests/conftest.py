"""Test fixtures and a stub classifier oracle.

This module provides:
- `StubClassifier`, a deterministic ClassifierOracleInterface that labels
  tokens from a word -> label table and records every feature vector it is
  asked to score
- Factories for sentences, documents and stub classifiers
- A tiny perceptron model written to a temporary JSON file

The stub lets tests pin classifier output exactly, so they can isolate the
window builder, the rule engine and the assembler.
"""

import json
from typing import Sequence

import pytest

from cybertag.classifier.interfaces import ClassifierOracleInterface
from cybertag.document import AnnotatedDocument, Sentence
from cybertag.labels import CyberLabel

ALL_LABELS = tuple(label.value for label in CyberLabel)


class StubClassifier(ClassifierOracleInterface):
    """Classifier that looks up each focus word in a fixed table.

    Words missing from the table get "O". Every call to score() is recorded
    in `calls` as the list of features received.
    """

    def __init__(self, word_labels: dict[str, str] | None = None) -> None:
        self._word_labels = dict(word_labels or {})
        self.calls: list[list[str]] = []

    @property
    def labels(self) -> tuple[str, ...]:
        return ALL_LABELS

    def score(self, features: Sequence[str]) -> dict[str, float]:
        self.calls.append(list(features))
        word = next(f[2:] for f in features if f.startswith("w="))
        chosen = self._word_labels.get(word, CyberLabel.O.value)
        return {label: (1.0 if label == chosen else 0.0) for label in self.labels}


@pytest.fixture
def make_sentence():
    """Factory: build a Sentence from words (POS defaults to NN) and optional labels."""

    def _make(
        words: Sequence[str],
        labels: Sequence[str | None] | None = None,
        pos: Sequence[str] | None = None,
        index: int = 0,
    ) -> Sentence:
        tags = pos or ["NN"] * len(words)
        sentence = Sentence.from_tagged(index, zip(words, tags))
        if labels is not None:
            for i, label in enumerate(labels):
                sentence.label_store[i] = label
        return sentence

    return _make


@pytest.fixture
def make_document():
    """Factory: build a document from lists of words."""

    def _make(sentences: Sequence[Sequence[str]], document_id: str = "test-doc") -> AnnotatedDocument:
        return AnnotatedDocument.from_tagged(
            [[(w, "NN") for w in words] for words in sentences],
            document_id=document_id,
        )

    return _make


@pytest.fixture
def stub_classifier():
    """Factory for StubClassifier instances."""

    def _make(word_labels: dict[str, str] | None = None) -> StubClassifier:
        return StubClassifier(word_labels)

    return _make


@pytest.fixture
def tiny_model_data() -> dict:
    """Perceptron weights that tag 'Windows' as a product and 'Microsoft' as a vendor."""
    return {
        "labels": ["O", "SW.Vendor", "SW.Product", "SW.Version"],
        "weights": {
            "w=Microsoft": [0.0, 3.0, 1.0, 0.0],
            "w=Windows": [0.0, 0.5, 3.0, 0.0],
            "t=CD": [0.5, 0.0, 0.0, 1.0],
            "pl=SW.Product": [0.0, 0.0, 0.0, 1.0],
            "t=DT": [2.0, 0.0, 0.0, 0.0],
        },
    }


@pytest.fixture
def model_file(tmp_path, tiny_model_data):
    """Path to the tiny model written as JSON."""
    path = tmp_path / "tiny-perceptron.json"
    path.write_text(json.dumps(tiny_model_data), encoding="utf-8")
    return path
