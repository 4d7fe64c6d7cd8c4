"""Tests for the command-line entry point."""

import json
import logging

import pytest

from cybertag.cli import main


@pytest.fixture
def tagged_input(tmp_path):
    path = tmp_path / "input.json"
    path.write_text(
        json.dumps(
            {
                "document_id": "advisory-1",
                "sentences": [
                    [["Microsoft", "NNP"], ["Windows", "NNP"], ["7", "CD"]],
                    [["See", "VB"], ["CVE-2014-1234", "NN"]],
                ],
            }
        ),
        encoding="utf-8",
    )
    return path


def test_annotates_input(tagged_input, model_file, capsys, monkeypatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    assert main([str(tagged_input), "--model", str(model_file)]) == 0

    output = json.loads(capsys.readouterr().out)
    first, second = output["sentences"]
    assert output["document_id"] == "advisory-1"
    assert [t["label"] for t in first["tokens"]] == ["SW.Vendor", "SW.Product", "SW.Version"]
    assert [m["entity_type"] + "." + m["subtype"] for m in first["mentions"]] == [
        "SW.Vendor",
        "SW.Product",
        "SW.Version",
    ]
    assert second["tokens"][1]["label"] == "VULN.CVE"
    assert second["mentions"][0]["head"] == {"start": 1, "end": 2}


def test_missing_model_exits_nonzero(tagged_input, tmp_path, capsys, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    assert main([str(tagged_input), "--model", str(tmp_path / "absent.json")]) == 1
    assert capsys.readouterr().out == ""


def test_binary_model_exits_nonzero(tagged_input, tmp_path, capsys, caplog, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    model = tmp_path / "Cyber-perceptron.bin"
    model.write_bytes(b"\xff\xfe\x00\x81binary")

    assert main([str(tagged_input), "--model", str(model)]) == 1
    assert capsys.readouterr().out == ""
    assert any(r.levelno == logging.CRITICAL for r in caplog.records)


def test_verbose_reaches_package_modules(tagged_input, model_file, caplog, monkeypatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    assert main([str(tagged_input), "--model", str(model_file), "--verbose"]) == 0

    messages = [r.getMessage() for r in caplog.records]
    assert any("rule firings" in m for m in messages)
    assert sum("Annotating advisory-1" in m for m in messages) == 1
    for name in ("cybertag.annotator", "cybertag.assembler", "cybertag.classifier.perceptron"):
        child = logging.getLogger(name)
        assert child.handlers == []
        assert child.level == logging.NOTSET
