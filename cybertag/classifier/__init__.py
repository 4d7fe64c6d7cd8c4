"""Classifier oracle interface and the perceptron implementation."""

from cybertag.classifier.interfaces import ClassifierOracleInterface, ModelLoadError
from cybertag.classifier.perceptron import (
    PerceptronClassifier,
    PerceptronModelFile,
    load_perceptron_model,
)

__all__ = [
    "ClassifierOracleInterface",
    "ModelLoadError",
    "PerceptronClassifier",
    "PerceptronModelFile",
    "load_perceptron_model",
]
