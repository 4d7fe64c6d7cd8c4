"""Cyber entity label taxonomy.

Labels are plain strings on the wire (the classifier model emits them as
strings), with the known values collected in `CyberLabel`. A label of the
form ``Type.Subtype`` names an entity; ``O`` means "no entity". A label
without a dot is type-only and never produces a mention.
"""

from enum import Enum


class CyberLabel(str, Enum):
    """Known token labels."""

    O = "O"
    """Token is not part of an entity."""

    SW_VENDOR = "SW.Vendor"
    SW_PRODUCT = "SW.Product"
    SW_VERSION = "SW.Version"
    SW_SYMBOL = "SW.Symbol"
    VULN_MS = "VULN.MS"
    VULN_CVE = "VULN.CVE"
    VULN_NAME = "VULN.Name"
    VULN_DESC = "VULN.Desc"


NO_ENTITY = CyberLabel.O.value

# Sentinels for window slots outside the sentence. None of them is a real
# word, tag or taxonomy label.
PREVIOUS_WORD = "_PREVIOUS_"
NEXT_WORD = "_NEXT_"
BOUNDARY_POS = "_POS_"
BOUNDARY_LABEL = "_BOUNDARY_"


def label_value(label: "str | CyberLabel") -> str:
    """Return the string form of a label."""
    if isinstance(label, CyberLabel):
        return label.value
    return label


def split_label(label: str | None) -> tuple[str, str] | None:
    """Split ``Type.Subtype`` at the first dot.

    Returns None for the no-entity label, unset labels, and labels that
    carry no dot.
    """
    if label is None:
        return None
    label = label_value(label)
    if label == NO_ENTITY or "." not in label:
        return None
    entity_type, subtype = label.split(".", 1)
    return entity_type, subtype
