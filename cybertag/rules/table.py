"""The default heuristic rule table.

Rules are listed from most to least specific; the engine stops at the first
match. Most of them recover software versions the classifier tends to miss
("before 2.1", "1.4 and earlier", "version 3", "all supported versions",
numerals after a product name, list continuations such as ", and 5").
"""

from functools import lru_cache

from cybertag.labels import CyberLabel
from cybertag.rules import patterns
from cybertag.rules.engine import HeuristicRule, LabelAction, LabelPredicate, WordPredicate
from cybertag.window import WindowSlot as S

O = CyberLabel.O
VERSION = CyberLabel.SW_VERSION
PRODUCT = CyberLabel.SW_PRODUCT


def _words(*slots: S, pattern: str | tuple[str, ...], ignore_case: bool = False) -> WordPredicate:
    return WordPredicate(slots=slots, patterns=pattern, ignore_case=ignore_case)


def _label(slot: S, label: CyberLabel) -> LabelPredicate:
    return LabelPredicate(slot=slot, label=label)


def _assign(label: CyberLabel, *slots: S) -> LabelAction:
    return LabelAction(slots=slots, label=label)


def _rule(name: str, predicates, actions) -> HeuristicRule:
    return HeuristicRule(name=name, predicates=tuple(predicates), actions=tuple(actions))


def build_rule_table() -> tuple[HeuristicRule, ...]:
    """Build a fresh copy of the default rule table."""
    return (
        # Identifiers win over whatever the classifier said.
        _rule(
            "cve-identifier",
            [_words(S.W, pattern=patterns.CVE_ID)],
            [_assign(CyberLabel.VULN_CVE, S.W)],
        ),
        _rule(
            "ms-bulletin",
            [_words(S.W, pattern=patterns.MS_BULLETIN)],
            [_assign(CyberLabel.VULN_MS, S.W)],
        ),
        _rule(
            "version-shape",
            [_words(S.W, pattern=patterns.VERSION_SHAPES), _label(S.W, O)],
            [_assign(VERSION, S.W)],
        ),
        _rule(
            "before-through-after-version",
            [_words(S.P, S.W, pattern=patterns.BEFORE_OR_THROUGH), _label(S.P2, VERSION)],
            [_assign(VERSION, S.W, S.P)],
        ),
        _rule(
            "before-through",
            [_words(S.P, S.W, pattern=patterns.BEFORE_OR_THROUGH), _label(S.W, O)],
            [_assign(VERSION, S.W, S.P)],
        ),
        _rule(
            "version-chars-after-product",
            [_words(S.W, pattern=patterns.VERSION_CHARS), _label(S.W, O), _label(S.P, PRODUCT)],
            [_assign(VERSION, S.W)],
        ),
        _rule(
            "and-earlier",
            [_words(S.W, S.N, S.N2, pattern=patterns.AND_EARLIER), _label(S.W, O)],
            [_assign(VERSION, S.W, S.N, S.N2)],
        ),
        _rule(
            "list-continuation",
            [
                _words(S.N, S.N2, pattern=patterns.LIST_CONTINUATION),
                _label(S.W, VERSION),
                _label(S.N2, O),
            ],
            [_assign(VERSION, S.N2)],
        ),
        _rule(
            "list-continuation-long",
            [
                _words(S.N, S.N2, S.N3, pattern=patterns.LIST_CONTINUATION),
                _label(S.W, VERSION),
                _label(S.N3, O),
            ],
            [_assign(VERSION, S.N3)],
        ),
        _rule(
            "version-keyword",
            [_words(S.W, S.N, pattern=patterns.VERSION_KEYWORD), _label(S.W, O)],
            [_assign(VERSION, S.N)],
        ),
        _rule(
            "all-versions-prior-to",
            [
                _words(S.P2, S.P, S.W, pattern=patterns.ALL_VERSIONS),
                _words(S.N, S.N2, pattern=patterns.PRIOR_TO),
            ],
            [_assign(VERSION, S.W, S.P, S.P2), _assign(VERSION, S.N2, S.N)],
        ),
        _rule(
            "all-supported-versions",
            [_words(S.P2, S.P, S.W, pattern=patterns.ALL_VERSIONS)],
            [_assign(VERSION, S.W, S.P, S.P2)],
        ),
        _rule(
            "all-versions",
            [_words(S.P, S.W, pattern=patterns.ALL_VERSIONS)],
            [_assign(VERSION, S.W, S.P)],
        ),
        _rule(
            "numeral-after-product",
            [_words(S.W, pattern=patterns.DIGITS), _label(S.P, PRODUCT)],
            [_assign(VERSION, S.W)],
        ),
        # "update 3 , 4": the marker and its number, then the listed number.
        _rule(
            "release-marker-list",
            [
                _words(S.W, S.N, pattern=(patterns.PRE_RELEASE, patterns.RELEASE_OR_UPDATE)),
                _label(S.W, O),
                _words(S.N2, S.N3, pattern=patterns.LIST_CONTINUATION),
            ],
            [_assign(VERSION, S.W, S.N, S.N3)],
        ),
        _rule(
            "pre-release",
            [_words(S.W, S.N, pattern=patterns.PRE_RELEASE), _label(S.W, O)],
            [_assign(VERSION, S.W, S.N)],
        ),
        _rule(
            "release-or-update",
            [_words(S.W, S.N, pattern=patterns.RELEASE_OR_UPDATE), _label(S.W, O)],
            [_assign(VERSION, S.W, S.N)],
        ),
        # Placeholder with no predicates; never fires.
        HeuristicRule(name="unfinished"),
    )


@lru_cache(maxsize=1)
def default_rule_table() -> tuple[HeuristicRule, ...]:
    """Return the shared, immutable default table."""
    return build_rule_table()
