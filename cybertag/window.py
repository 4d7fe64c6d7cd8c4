"""Context window around a focus token.

A `Window` exposes the words, POS tags and labels of the tokens two
positions before the focus through three positions after it. Slots outside
the sentence resolve to sentinel values, so callers never index past the
sentence edges.

Labels are not copied into the window: reads and writes go to the owning
sentence's `LabelStore`. This is what lets a rule action rewrite the label
of a token that was finalized on an earlier step of the pass.
"""

from enum import Enum

from cybertag.document import LabelStore, Sentence
from cybertag.labels import (
    BOUNDARY_LABEL,
    BOUNDARY_POS,
    NEXT_WORD,
    NO_ENTITY,
    PREVIOUS_WORD,
    CyberLabel,
    label_value,
)


class WindowSlot(int, Enum):
    """Window positions as offsets from the focus token."""

    P2 = -2
    P = -1
    W = 0
    N = 1
    N2 = 2
    N3 = 3


class Window:
    """Words, tags and labels visible from one focus position."""

    def __init__(self, sentence: Sentence, focus: int) -> None:
        if not 0 <= focus < len(sentence):
            raise IndexError(f"focus {focus} outside sentence of length {len(sentence)}")
        self._sentence = sentence
        self._store: LabelStore = sentence.label_store
        self.focus = focus

    def _index(self, slot: WindowSlot) -> int:
        return self.focus + int(slot)

    def in_range(self, slot: WindowSlot) -> bool:
        return self._store.in_range(self._index(slot))

    def word(self, slot: WindowSlot) -> str:
        i = self._index(slot)
        if self._store.in_range(i):
            return self._sentence.tokens[i].word
        return PREVIOUS_WORD if slot < 0 else NEXT_WORD

    def pos(self, slot: WindowSlot) -> str:
        i = self._index(slot)
        if self._store.in_range(i):
            return self._sentence.tokens[i].pos
        return BOUNDARY_POS

    def label(self, slot: WindowSlot) -> str:
        """Current label of a slot.

        Tokens not labeled yet read as the no-entity label.
        """
        i = self._index(slot)
        if not self._store.in_range(i):
            return BOUNDARY_LABEL
        current = self._store[i]
        return NO_ENTITY if current is None else current

    def set_label(self, slot: WindowSlot, label: "str | CyberLabel") -> bool:
        """Write a label through to the sentence's label store.

        Returns False (and writes nothing) for out-of-range slots.
        """
        i = self._index(slot)
        if not self._store.in_range(i):
            return False
        self._store[i] = label_value(label)
        return True

    def joined_words(self, slots) -> str:
        """Words of `slots`, in the given order, joined by single spaces."""
        return " ".join(self.word(s) for s in slots)

    def features(self) -> list[str]:
        """Feature vector for the classifier.

        Uses the focus token, the two tokens before it (with their finalized
        labels) and the two tokens after it (words and tags only), plus two
        combination features: the previous two labels, and the previous
        label paired with the focus word.
        """
        prev_label = self.label(WindowSlot.P)
        prev2_label = self.label(WindowSlot.P2)
        word = self.word(WindowSlot.W)
        return [
            f"w={word}",
            f"t={self.pos(WindowSlot.W)}",
            f"pw={self.word(WindowSlot.P)}",
            f"pt={self.pos(WindowSlot.P)}",
            f"pl={prev_label}",
            f"ppw={self.word(WindowSlot.P2)}",
            f"ppt={self.pos(WindowSlot.P2)}",
            f"ppl={prev2_label}",
            f"nw={self.word(WindowSlot.N)}",
            f"nt={self.pos(WindowSlot.N)}",
            f"nnw={self.word(WindowSlot.N2)}",
            f"nnt={self.pos(WindowSlot.N2)}",
            f"ppl+pl={prev2_label}+{prev_label}",
            f"pl+w={prev_label}+{word}",
        ]

    def __repr__(self) -> str:
        cells = ", ".join(f"{s.name}={self.word(s)!r}/{self.label(s)}" for s in WindowSlot)
        return f"Window(focus={self.focus}, {cells})"


def build_window(sentence: Sentence, focus: int) -> Window:
    """Return the window of `sentence` centred on token `focus`."""
    return Window(sentence, focus)
