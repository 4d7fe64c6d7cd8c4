"""Sequential cyber entity annotator.

Processing is strictly ordered: sentences in document order, tokens left to
right within a sentence. For each focus token:

1. Build the context window. Its rearward label slots hold the labels
   finalized on the two previous steps.
2. Ask the classifier for the best label from the window features, unless
   a look-ahead rule action already assigned this token a label.
3. Run the heuristic rule engine on the window. The first matching rule may
   rewrite the focus label, and labels of neighbors on either side.

Once the last token is done, the finalized label sequence is handed to the
span assembler, so retroactive rewrites are reflected in the mentions.

The classifier and the rule engine are read-only and may be shared between
annotators on different threads. Each sentence owns its label store; an
annotator must not be run on the same document from two threads.

Example usage:
    ```python
    annotator = CyberEntityAnnotator.from_settings(load_cybertag_config())
    document = AnnotatedDocument.from_tagged([[("Microsoft", "NNP"), ("Windows", "NNP"), ("7", "CD")]])
    mentions = annotator.annotate(document)
    ```
"""

from typing import Sequence

from cybertag.assembler import EntitySpanAssembler, MergePolicy
from cybertag.classifier.interfaces import ClassifierOracleInterface
from cybertag.classifier.perceptron import load_perceptron_model
from cybertag.config import CybertagSettings
from cybertag.document import AnnotatedDocument, Sentence
from cybertag.logging import setup_logging
from cybertag.mention import CyberEntityMention
from cybertag.rules.engine import HeuristicRule, RuleEngine
from cybertag.rules.table import default_rule_table
from cybertag.window import build_window


class CyberEntityAnnotator:
    """Label tokens and assemble mentions for whole documents."""

    def __init__(
        self,
        classifier: ClassifierOracleInterface,
        rules: Sequence[HeuristicRule] | RuleEngine | None = None,
        assembler: EntitySpanAssembler | None = None,
    ) -> None:
        """Initialize the annotator.

        Args:
            classifier: Loaded classifier oracle.
            rules: Rule engine or rule table; defaults to the built-in table.
            assembler: Span assembler; defaults to the legacy merge policy.
        """
        self.classifier = classifier
        if isinstance(rules, RuleEngine):
            self.rule_engine = rules
        else:
            self.rule_engine = RuleEngine(default_rule_table() if rules is None else rules)
        self.assembler = assembler or EntitySpanAssembler()
        self.logger = setup_logging()

    @classmethod
    def from_settings(cls, settings: CybertagSettings | None = None) -> "CyberEntityAnnotator":
        """Load the classifier named in `settings` and build an annotator.

        Raises:
            ModelLoadError: If the model cannot be loaded.
        """
        settings = settings or CybertagSettings()
        classifier = load_perceptron_model(settings.model_location)
        return cls(classifier, assembler=EntitySpanAssembler(MergePolicy(settings.merge_policy)))

    def label_sentence(self, sentence: Sentence) -> list[str | None]:
        """Run the label pass over one sentence and return its final labels."""
        store = sentence.label_store
        store.clear()
        fired = 0
        for focus in range(len(sentence)):
            window = build_window(sentence, focus)
            if not store.is_set(focus):
                scores = self.classifier.score(window.features())
                store[focus] = self.classifier.best_label(scores)
            if self.rule_engine.evaluate(window):
                fired += 1
        if fired:
            self.logger.debug(f"Sentence {sentence.index}: {fired} rule firings", pprint=False)
        return store.snapshot()

    def annotate_sentence(self, sentence: Sentence) -> list[CyberEntityMention]:
        """Label one sentence and attach its mentions."""
        labels = self.label_sentence(sentence)
        sentence.mentions = self.assembler.assemble(sentence, labels)
        return sentence.mentions

    def annotate(self, document: AnnotatedDocument) -> dict[int, list[CyberEntityMention]]:
        """Label every sentence of `document` and attach mentions to each.

        Returns:
            Mention lists keyed by sentence index. Sentences without mentions
            are not included.
        """
        self.logger.info(f"Annotating {document.document_id} with cyber labels ...", pprint=False)
        for sentence in document.sentences:
            self.label_sentence(sentence)
        return self.assembler.assemble_document(document)
