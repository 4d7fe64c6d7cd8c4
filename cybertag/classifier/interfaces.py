"""Classifier oracle interface.

The annotator treats the statistical classifier as an opaque scorer: it
hands over the feature vector built by `Window.features()` and gets back a
score per label. How the model was trained and how its parameters are
encoded are the implementation's business.

Implementations must be deterministic (identical features and weights give
identical scores) and read-only after construction, so that one instance can
be shared by annotators running on different threads.
"""

from abc import ABC, abstractmethod
from typing import Mapping, Sequence


class ModelLoadError(RuntimeError):
    """Raised when classifier parameters cannot be loaded.

    There is no degraded mode without a classifier, so callers are expected
    to treat this as fatal.
    """


class ClassifierOracleInterface(ABC):
    """Score a feature vector against every known label."""

    @property
    @abstractmethod
    def labels(self) -> tuple[str, ...]:
        """Return the labels this model can emit, in model order."""

    @abstractmethod
    def score(self, features: Sequence[str]) -> dict[str, float]:
        """Score every label for the given features.

        Args:
            features: ``name=value`` feature strings. Features unknown to the
                model contribute nothing.

        Returns:
            Mapping of label to score. Higher is better.
        """

    def best_label(self, scores: Mapping[str, float]) -> str:
        """Return the highest-scoring label.

        Ties go to the label that comes first in `labels`.
        """
        if not scores:
            raise ValueError("Cannot pick a label from empty scores")
        order = {label: i for i, label in enumerate(self.labels)}
        return max(scores, key=lambda label: (scores[label], -order.get(label, len(order))))

    def predict(self, features: Sequence[str]) -> str:
        """Convenience for ``best_label(score(features))``."""
        return self.best_label(self.score(features))
