"""Address segment classification and splitting.

Each taxonomy segment is tagged once, at parse time, as alphabetic or
numeric. Everything downstream dispatches on the tag.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional, Tuple

from nna_taxonomy.constants import SEPARATOR

_DIGITS = re.compile(r"[0-9]+")


class SegmentKind(str, Enum):
    ALPHABETIC = "alphabetic"
    NUMERIC = "numeric"


class Segment(NamedTuple):
    kind: SegmentKind
    value: str

    @property
    def is_numeric(self) -> bool:
        return self.kind is SegmentKind.NUMERIC


def classify(value: str) -> Segment:
    """Tag a segment: all ASCII digits is numeric, anything else alphabetic."""
    value = value.strip()
    if _DIGITS.fullmatch(value):
        return Segment(SegmentKind.NUMERIC, value)
    return Segment(SegmentKind.ALPHABETIC, value)


@dataclass(frozen=True)
class AddressParts:
    """A split address.

    ``sequential`` is None for three-segment addresses. ``extension`` holds
    every segment after the fourth, verbatim.
    """
    layer: Segment
    category: Segment
    subcategory: Segment
    sequential: Optional[str] = None
    extension: Tuple[str, ...] = ()

    @property
    def all_numeric(self) -> bool:
        return self.layer.is_numeric and self.category.is_numeric and self.subcategory.is_numeric

    @property
    def all_alphabetic(self) -> bool:
        return not (self.layer.is_numeric or self.category.is_numeric or self.subcategory.is_numeric)


def split_address(address: str, min_segments: int = 4) -> Optional[AddressParts]:
    """Split an address on '.'.

    Returns None when there are fewer than ``min_segments`` segments or a
    taxonomy segment is blank.
    """
    parts = address.strip().split(SEPARATOR)
    if len(parts) < min_segments or len(parts) < 3:
        return None
    layer, category, subcategory = (classify(p) for p in parts[:3])
    if not (layer.value and category.value and subcategory.value):
        return None
    sequential = parts[3] if len(parts) > 3 else None
    return AddressParts(layer, category, subcategory, sequential, tuple(parts[4:]))


def join_address(layer: str, category: str, subcategory: str,
                 sequential: Optional[str] = None, extension: Tuple[str, ...] = ()) -> str:
    """Inverse of ``split_address``."""
    parts = [layer, category, subcategory]
    if sequential is not None:
        parts.append(sequential)
    parts.extend(extension)
    return SEPARATOR.join(parts)
