"""
Cyber entity tagging - label refinement and span assembly.

Assigns cyber-security labels (software vendor/product/version/symbol,
vulnerability identifiers, names and descriptions) to POS-tagged tokens with
a sequential classifier corrected by an ordered heuristic rule table, then
groups labeled tokens into entity mentions.

    from cybertag import AnnotatedDocument, CyberEntityAnnotator, load_cybertag_config

    annotator = CyberEntityAnnotator.from_settings(load_cybertag_config())
    mentions = annotator.annotate(AnnotatedDocument.from_tagged(tagged_sentences))
"""

from cybertag.annotator import CyberEntityAnnotator
from cybertag.assembler import EntitySpanAssembler, MergePolicy
from cybertag.classifier import (
    ClassifierOracleInterface,
    ModelLoadError,
    PerceptronClassifier,
    load_perceptron_model,
)
from cybertag.config import CybertagSettings, load_cybertag_config
from cybertag.document import AnnotatedDocument, LabelStore, Sentence, Token
from cybertag.labels import CyberLabel, split_label
from cybertag.mention import CyberEntityMention, Span
from cybertag.rules import HeuristicRule, LabelAction, LabelPredicate, RuleEngine, WordPredicate, default_rule_table
from cybertag.window import Window, WindowSlot, build_window

__all__ = [
    "AnnotatedDocument",
    "ClassifierOracleInterface",
    "CyberEntityAnnotator",
    "CyberEntityMention",
    "CyberLabel",
    "CybertagSettings",
    "EntitySpanAssembler",
    "HeuristicRule",
    "LabelAction",
    "LabelPredicate",
    "LabelStore",
    "MergePolicy",
    "ModelLoadError",
    "PerceptronClassifier",
    "RuleEngine",
    "Sentence",
    "Span",
    "Token",
    "Window",
    "WindowSlot",
    "WordPredicate",
    "build_window",
    "default_rule_table",
    "load_cybertag_config",
    "load_perceptron_model",
    "split_label",
]

__version__ = "0.1.0"
