"""Command-line entry point.

Usage:
    python -m cybertag.cli tagged.json [--model PATH] [--merge-policy legacy|adjacent] [--verbose]

The input holds POS-tagged sentences:

    {"sentences": [[["Microsoft", "NNP"], ["Windows", "NNP"], ["7", "CD"]]]}

Output is JSON with the final label of every token and the mentions per
sentence. A model that cannot be loaded ends the process with status 1.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from cybertag.annotator import CyberEntityAnnotator
from cybertag.assembler import MergePolicy
from cybertag.classifier.interfaces import ModelLoadError
from cybertag.config import load_cybertag_config
from cybertag.document import AnnotatedDocument
from cybertag.logging import setup_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Label cyber entities in POS-tagged text.")
    parser.add_argument("input", type=Path, help="JSON file with tagged sentences")
    parser.add_argument("--model", default=None, help="Model resource name or path (overrides config)")
    parser.add_argument(
        "--merge-policy",
        choices=[p.value for p in MergePolicy],
        default=None,
        help="Span merge policy (overrides config)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def render(document: AnnotatedDocument) -> dict:
    return {
        "document_id": document.document_id,
        "sentences": [
            {
                "index": s.index,
                "tokens": [
                    {"word": t.word, "pos": t.pos, "label": label}
                    for t, label in zip(s.tokens, s.labels)
                ],
                "mentions": [m.model_dump(mode="json") for m in s.mentions],
            }
            for s in document.sentences
        ],
    }


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    level = logging.DEBUG if args.verbose else logging.INFO
    logger = setup_logging(level=level, name="cybertag", stream=sys.stderr)

    settings = load_cybertag_config()
    overrides = {}
    if args.model:
        overrides["model_location"] = args.model
    if args.merge_policy:
        overrides["merge_policy"] = MergePolicy(args.merge_policy)
    if overrides:
        settings = settings.model_copy(update=overrides)
    logger.debug(settings)

    try:
        annotator = CyberEntityAnnotator.from_settings(settings)
    except ModelLoadError as e:
        logger.critical(f"Cannot start without a classifier: {e}", pprint=False)
        return 1

    data = json.loads(args.input.read_text(encoding="utf-8"))
    document = AnnotatedDocument.from_tagged(data["sentences"], document_id=data.get("document_id", args.input.stem))
    annotator.annotate(document)
    json.dump(render(document), sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
