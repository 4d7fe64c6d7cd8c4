"""Ordered first-match heuristic rule engine.

A rule is a conjunction of predicates over window slots plus a list of label
assignments. The engine tries rules in table order; the first rule whose
predicates all hold applies its assignments and evaluation stops for that
focus token. Rules are therefore authored from most to least specific.

Assignments write through the window into the sentence's label store, so a
rule may rewrite labels of tokens before the focus (already finalized) or
after it (not reached yet).

Predicates come in two kinds:

- `WordPredicate`: the words of one or more slots, joined with single
  spaces in slot order, must contain a match (`re.search`) for at least one
  of the patterns.
- `LabelPredicate`: the current label of a slot must equal a tag.

A rule with no predicates never fires.
"""

import logging
import re
from functools import lru_cache
from typing import Annotated, Any, Literal, Sequence, Union

from pydantic import BaseModel, Field, field_validator

from cybertag.labels import label_value
from cybertag.window import Window, WindowSlot

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def compile_pattern(pattern: str, ignore_case: bool = False) -> re.Pattern[str]:
    """Compile (and cache) a pattern source string."""
    return re.compile(pattern, re.IGNORECASE if ignore_case else 0)


def _coerce_slot(value: Any) -> Any:
    if isinstance(value, str) and not isinstance(value, WindowSlot):
        try:
            return WindowSlot[value]
        except KeyError as e:
            raise ValueError(f"Unknown window slot {value!r}") from e
    return value


class WordPredicate(BaseModel, frozen=True):
    """Pattern test over the (joined) words of one or more slots."""

    kind: Literal["word"] = "word"
    slots: tuple[WindowSlot, ...] = Field(min_length=1)
    patterns: tuple[str, ...] = Field(min_length=1, description="Any-of pattern specs.")
    ignore_case: bool = False

    @field_validator("slots", mode="before")
    @classmethod
    def _slots_by_name(cls, value: Any) -> Any:
        if isinstance(value, (str, int)):
            value = (value,)
        return tuple(_coerce_slot(v) for v in value)

    @field_validator("patterns", mode="before")
    @classmethod
    def _single_pattern(cls, value: Any) -> Any:
        if isinstance(value, str):
            return (value,)
        return value

    @field_validator("patterns")
    @classmethod
    def _patterns_compile(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        for pattern in value:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValueError(f"Invalid pattern {pattern!r}: {e}") from e
        return value

    def holds(self, window: Window) -> bool:
        text = window.joined_words(self.slots)
        return any(compile_pattern(p, self.ignore_case).search(text) for p in self.patterns)


class LabelPredicate(BaseModel, frozen=True):
    """Equality test of a slot's current label."""

    kind: Literal["label"] = "label"
    slot: WindowSlot
    label: str

    @field_validator("slot", mode="before")
    @classmethod
    def _slot_by_name(cls, value: Any) -> Any:
        return _coerce_slot(value)

    @field_validator("label", mode="before")
    @classmethod
    def _label_str(cls, value: Any) -> Any:
        return label_value(value)

    def holds(self, window: Window) -> bool:
        return window.label(self.slot) == self.label


Predicate = Annotated[Union[WordPredicate, LabelPredicate], Field(discriminator="kind")]


class LabelAction(BaseModel, frozen=True):
    """Assign `label` to every slot in `slots`."""

    slots: tuple[WindowSlot, ...] = Field(min_length=1)
    label: str

    @field_validator("slots", mode="before")
    @classmethod
    def _slots_by_name(cls, value: Any) -> Any:
        if isinstance(value, (str, int)):
            value = (value,)
        return tuple(_coerce_slot(v) for v in value)

    @field_validator("label", mode="before")
    @classmethod
    def _label_str(cls, value: Any) -> Any:
        return label_value(value)

    def apply(self, window: Window) -> int:
        """Write the label; returns how many in-range slots were written."""
        return sum(1 for slot in self.slots if window.set_label(slot, self.label))


class HeuristicRule(BaseModel, frozen=True):
    """Predicates that must all hold, and the label assignments they trigger."""

    name: str = ""
    predicates: tuple[Predicate, ...] = ()
    actions: tuple[LabelAction, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.predicates

    def matches(self, window: Window) -> bool:
        if not self.predicates:
            return False
        return all(p.holds(window) for p in self.predicates)

    def apply(self, window: Window) -> None:
        for action in self.actions:
            action.apply(window)


class RuleEngine:
    """Evaluate an ordered rule table against windows.

    The engine holds no per-sentence state and can be shared between
    annotators.
    """

    def __init__(self, rules: Sequence[HeuristicRule]) -> None:
        self._rules: tuple[HeuristicRule, ...] = tuple(rules)
        for position, rule in enumerate(self._rules):
            if rule.is_empty:
                logger.debug("Rule %d (%r) has no predicates and will never fire", position, rule.name)

    @property
    def rules(self) -> tuple[HeuristicRule, ...]:
        return self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def first_match(self, window: Window) -> HeuristicRule | None:
        """Return the first rule whose predicates hold, without applying it."""
        for rule in self._rules:
            if rule.matches(window):
                return rule
        return None

    def evaluate(self, window: Window) -> bool:
        """Fire the first matching rule. Returns True if one fired."""
        rule = self.first_match(window)
        if rule is None:
            return False
        rule.apply(window)
        logger.debug("Rule %r fired at focus %d", rule.name, window.focus)
        return True
