"""Averaged-perceptron scorer backed by a JSON weight file.

Model format:

    {
        "labels": ["O", "SW.Product", ...],
        "weights": {
            "w=Windows": [0.0, 2.5, ...],
            ...
        }
    }

Each weight row holds one weight per label, in `labels` order. A label's
score is the sum of the rows of the features present in the input.

Models are looked up first as a resource embedded in the `cybertag.resources`
package, then on the filesystem.
"""

import json
import logging
from importlib import resources
from pathlib import Path
from typing import Sequence

import numpy as np
from pydantic import BaseModel, Field, ValidationError, model_validator

from cybertag.classifier.interfaces import ClassifierOracleInterface, ModelLoadError
from cybertag.logging import setup_logging

logger = logging.getLogger(__name__)

RESOURCE_PACKAGE = "cybertag.resources"


class PerceptronModelFile(BaseModel, frozen=True):
    """Validated contents of a model file."""

    labels: tuple[str, ...] = Field(min_length=1, description="Output labels in weight-column order.")
    weights: dict[str, tuple[float, ...]] = Field(
        default_factory=dict,
        description="Per-feature weight rows, one weight per label.",
    )

    @model_validator(mode="after")
    def _rows_match_labels(self) -> "PerceptronModelFile":
        if len(set(self.labels)) != len(self.labels):
            raise ValueError("Model labels must be unique")
        width = len(self.labels)
        for feature, row in self.weights.items():
            if len(row) != width:
                raise ValueError(f"Feature {feature!r} has {len(row)} weights, expected {width}")
        return self


class PerceptronClassifier(ClassifierOracleInterface):
    """Linear scorer over sparse binary features."""

    def __init__(self, model: PerceptronModelFile, source: str = "<memory>") -> None:
        self._labels = model.labels
        self._feature_index = {feature: i for i, feature in enumerate(model.weights)}
        if model.weights:
            self._matrix = np.array(list(model.weights.values()), dtype=np.float64)
        else:
            self._matrix = np.zeros((0, len(model.labels)), dtype=np.float64)
        self._matrix.setflags(write=False)
        self.source = source

    @property
    def labels(self) -> tuple[str, ...]:
        return self._labels

    @property
    def feature_count(self) -> int:
        return len(self._feature_index)

    def score(self, features: Sequence[str]) -> dict[str, float]:
        rows = [self._feature_index[f] for f in features if f in self._feature_index]
        if rows:
            totals = self._matrix[rows].sum(axis=0)
        else:
            totals = np.zeros(len(self._labels), dtype=np.float64)
        return {label: float(v) for label, v in zip(self._labels, totals)}

    def best_label(self, scores) -> str:
        if not scores:
            raise ValueError("Cannot pick a label from empty scores")
        values = np.array([scores.get(label, -np.inf) for label in self._labels])
        # argmax returns the first maximum, which is the model-order tie break
        return self._labels[int(np.argmax(values))]

    @classmethod
    def from_dict(cls, data: dict, source: str = "<memory>") -> "PerceptronClassifier":
        try:
            model = PerceptronModelFile.model_validate(data)
        except ValidationError as e:
            raise ModelLoadError(f"Invalid model data from {source}: {e}") from e
        return cls(model, source=source)


def _read_embedded(location: str) -> str | None:
    if Path(location).is_absolute():
        return None
    try:
        resource = resources.files(RESOURCE_PACKAGE).joinpath(location)
        if resource.is_file():
            return resource.read_text(encoding="utf-8")
    except (ModuleNotFoundError, OSError, ValueError):
        return None
    return None


def load_perceptron_model(location: str | Path) -> PerceptronClassifier:
    """Load a model from the embedded resources or from the filesystem.

    Args:
        location: Resource name inside `cybertag.resources`, or a file path.

    Raises:
        ModelLoadError: If the model cannot be found, read or validated.
    """
    log = setup_logging()
    location = str(location)
    log.info(f"Loading model from '{location}'", pprint=False)

    text = _read_embedded(location)
    source = f"resource:{location}"
    if text is None:
        path = Path(location)
        source = str(path)
        try:
            text = path.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            log.error(
                {
                    "message": f"Could not load cyber model from '{location}'",
                    "error": str(e),
                },
                pprint=True,
            )
            raise ModelLoadError(f"Could not load cyber model from '{location}': {e}") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        log.error({"message": f"Model at {source} is not valid JSON", "error": str(e)}, pprint=True)
        raise ModelLoadError(f"Model at {source} is not valid JSON: {e}") from e

    classifier = PerceptronClassifier.from_dict(data, source=source)
    logger.debug("Loaded %d features over %d labels from %s", classifier.feature_count, len(classifier.labels), source)
    return classifier
