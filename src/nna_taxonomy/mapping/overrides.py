"""Override registry: explicit corrections to table-derived numeric codes.

Keys are ``LAYER.CATEGORY.SUBCATEGORY`` (subcategory code) or
``LAYER.CATEGORY`` (category code). Values are numeric codes. An entry always
wins over the table, in both directions: forward lookups return the override
value, and reverse lookups of that value return the overridden code.
"""

import logging
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from nna_taxonomy.constants import CODE_WIDTH
from nna_taxonomy.schemas.param import normalize_override_key, normalize_override_value

logger = logging.getLogger(__name__)

OverrideKey = Tuple[str, ...]


class OverrideRegistry:
    """Immutable lookup table of numeric-code overrides.

    Parameters
    ----------
    entries : mapping of str to str, optional
        ``{"S.POP.HPM": "007"}`` style entries. Keys are case-insensitive;
        values are zero-padded to ``code_width``.
    code_width : int
        Zero-padding width of the stored codes.

    Raises
    ------
    ValueError
        If a key or value is malformed, a value is wider than ``code_width``,
        or two entries of the same scope share a value.
    """

    def __init__(self, entries: Optional[Mapping[str, str]] = None, code_width: int = CODE_WIDTH):
        forward: Dict[OverrideKey, str] = {}
        reverse: Dict[Tuple[OverrideKey, int], str] = {}
        for raw_key, raw_value in (entries or {}).items():
            key = tuple(normalize_override_key(raw_key).split("."))
            label = ".".join(key)
            if key in forward:
                raise ValueError(f"Duplicate override key {raw_key!r}: {label} is already listed")

            number = int(normalize_override_value(raw_value))
            value = str(number).zfill(code_width)
            if len(value) > code_width:
                raise ValueError(
                    f"Invalid override code {raw_value!r} for {label}: wider than {code_width} digits"
                )

            # reverse index: (scope, numeric) -> overridden code
            taken = reverse.get((key[:-1], number))
            if taken is not None:
                other = ".".join(key[:-1] + (taken,))
                raise ValueError(f"Override {label}={value} collides with override {other}")
            forward[key] = value
            reverse[(key[:-1], number)] = key[-1]

        self.code_width = code_width
        self._forward = MappingProxyType(forward)
        self._reverse = MappingProxyType(reverse)
        logger.debug("Override registry loaded with %d entries", len(forward))

    def __len__(self) -> int:
        return len(self._forward)

    def __iter__(self) -> Iterator[str]:
        return (".".join(key) for key in self._forward)

    def __contains__(self, key: str) -> bool:
        return tuple(str(key).upper().split(".")) in self._forward

    def items(self) -> List[Tuple[str, str]]:
        return [(".".join(key), value) for key, value in self._forward.items()]

    def lookup(self, layer: str, category: str, subcategory: Optional[str] = None) -> Optional[str]:
        """Override for a subcategory (or a category when ``subcategory`` is None).

        Returns None when no override is present.
        """
        key = (layer.upper(), category.upper())
        if subcategory is not None:
            key += (subcategory.upper(),)
        return self._forward.get(key)

    def reverse_lookup(self, layer: str, category: Optional[str], numeric_code: str) -> Optional[str]:
        """Code whose override value is ``numeric_code`` within the scope.

        ``category`` None searches category-level overrides of ``layer``.
        """
        if not str(numeric_code).isdigit():
            return None
        scope = (layer.upper(),) if category is None else (layer.upper(), category.upper())
        return self._reverse.get((scope, int(numeric_code)))

    def check_against(self, table) -> List[str]:
        """Advisory consistency report against a ``TaxonomyTable``.

        Flags overrides that name entries absent from the table, and override
        values that another table entry in the same scope already uses.
        """
        issues = []
        for key, value in self._forward.items():
            label = ".".join(key)
            if len(key) == 2:
                layer, code = key
                if table.find_category(layer, code) is None:
                    issues.append(f"Override {label}: category not in taxonomy")
                clash = table.find_category_by_numeric(layer, value)
            else:
                layer, category, code = key
                if not table.has_triple(layer, category, code):
                    issues.append(f"Override {label}: subcategory not in taxonomy")
                clash = table.find_subcategory_by_numeric(layer, category, value)
            if clash is not None and clash.code != key[-1] and ".".join(key[:-1] + (clash.code,)) not in self:
                issues.append(f"Override {label}={value} collides with table entry {clash.code}")

        for issue in issues:
            logger.warning("Override issue: %s", issue)
        return issues
