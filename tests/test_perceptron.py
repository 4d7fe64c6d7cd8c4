"""Tests for the perceptron classifier oracle and model loading."""

import json

import pytest

from cybertag.classifier.interfaces import ModelLoadError
from cybertag.classifier.perceptron import (
    PerceptronClassifier,
    PerceptronModelFile,
    load_perceptron_model,
)


class TestScoring:
    def test_scores_sum_feature_rows(self, tiny_model_data) -> None:
        classifier = PerceptronClassifier.from_dict(tiny_model_data)
        scores = classifier.score(["w=Windows", "t=CD", "unknown=feature"])

        assert scores == {"O": 0.5, "SW.Vendor": 0.5, "SW.Product": 3.0, "SW.Version": 1.0}
        assert classifier.best_label(scores) == "SW.Product"

    def test_unknown_features_score_zero(self, tiny_model_data) -> None:
        classifier = PerceptronClassifier.from_dict(tiny_model_data)
        scores = classifier.score(["w=nothing"])
        assert set(scores.values()) == {0.0}

    def test_ties_go_to_first_label(self, tiny_model_data) -> None:
        classifier = PerceptronClassifier.from_dict(tiny_model_data)
        assert classifier.predict([]) == "O"
        assert classifier.best_label({"SW.Version": 1.0, "SW.Vendor": 1.0}) == "SW.Vendor"

    def test_scoring_is_deterministic(self, tiny_model_data) -> None:
        classifier = PerceptronClassifier.from_dict(tiny_model_data)
        features = ["w=Microsoft", "pl=SW.Product", "t=DT"]
        assert classifier.score(features) == classifier.score(features)

    def test_empty_scores_rejected(self, tiny_model_data) -> None:
        with pytest.raises(ValueError):
            PerceptronClassifier.from_dict(tiny_model_data).best_label({})

    def test_model_without_weights(self) -> None:
        classifier = PerceptronClassifier.from_dict({"labels": ["O", "SW.Product"]})
        assert classifier.feature_count == 0
        assert classifier.predict(["w=x"]) == "O"


class TestModelValidation:
    def test_row_width_must_match_labels(self) -> None:
        with pytest.raises(ModelLoadError, match="expected 2"):
            PerceptronClassifier.from_dict({"labels": ["O", "SW.Product"], "weights": {"w=a": [1.0]}})

    def test_labels_required(self) -> None:
        with pytest.raises(ModelLoadError):
            PerceptronClassifier.from_dict({"labels": [], "weights": {}})

    def test_duplicate_labels_rejected(self) -> None:
        with pytest.raises(ValueError, match="unique"):
            PerceptronModelFile(labels=("O", "O"))


class TestLoading:
    def test_load_from_filesystem(self, model_file) -> None:
        classifier = load_perceptron_model(model_file)
        assert classifier.labels == ("O", "SW.Vendor", "SW.Product", "SW.Version")
        assert classifier.source == str(model_file)

    def test_missing_file_raises_model_load_error(self, tmp_path) -> None:
        with pytest.raises(ModelLoadError):
            load_perceptron_model(tmp_path / "missing.json")

    def test_missing_resource_name_raises_model_load_error(self) -> None:
        with pytest.raises(ModelLoadError):
            load_perceptron_model("no-such-model-anywhere.json")

    def test_invalid_json_raises_model_load_error(self, tmp_path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ModelLoadError, match="not valid JSON"):
            load_perceptron_model(path)

    def test_binary_model_raises_model_load_error(self, tmp_path) -> None:
        path = tmp_path / "Cyber-perceptron.bin"
        path.write_bytes(b"\xff\xfe\x00\x81\x9c\x00\x00\x00weights")
        with pytest.raises(ModelLoadError, match="Could not load cyber model"):
            load_perceptron_model(path)

    def test_invalid_model_raises_model_load_error(self, tmp_path) -> None:
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"weights": {}}), encoding="utf-8")
        with pytest.raises(ModelLoadError, match="Invalid model"):
            load_perceptron_model(path)

    def test_relative_path_falls_back_to_filesystem(self, model_file, monkeypatch) -> None:
        monkeypatch.chdir(model_file.parent)
        classifier = load_perceptron_model(model_file.name)
        assert classifier.source == model_file.name
