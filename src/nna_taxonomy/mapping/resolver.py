"""Numeric code resolver: alphabetic <-> numeric codes per taxonomy level.

Two families of lookups share one implementation:

- ``find_*`` methods are strict. They return ``None`` on a miss and log
  nothing; the converter's reject path builds on them.
- The remaining methods apply the graceful policy: forward lookups fall
  back to the default code ("001"), reverse lookups to ``""``, and a warning
  is logged. Live-preview rendering builds on these.

Every lookup consults the override registry before the table.
"""

import logging
from typing import Optional

from nna_taxonomy.constants import DEFAULT_CODE, UNKNOWN_LAYER_CODE
from nna_taxonomy.mapping.overrides import OverrideRegistry
from nna_taxonomy.taxonomy.table import TaxonomyTable

logger = logging.getLogger(__name__)


class NumericCodeResolver:
    """Two-way code lookups over a table and an override registry.

    Parameters
    ----------
    table : TaxonomyTable
    overrides : OverrideRegistry
    default_code : str
        Returned by graceful forward lookups on a miss.
    """

    def __init__(self, table: TaxonomyTable, overrides: OverrideRegistry,
                 default_code: str = DEFAULT_CODE):
        self.table = table
        self.overrides = overrides
        self.default_code = self.pad(default_code)

    def pad(self, numeric_code) -> str:
        """Zero-pad a digit string to the table's code width."""
        return str(numeric_code).zfill(self.table.code_width)

    # ------------------------------------------------------------------
    # Layers
    # ------------------------------------------------------------------

    def find_layer_numeric_code(self, layer: str) -> Optional[int]:
        num = self.table.get_layer_numeric_code(layer)
        return None if num == UNKNOWN_LAYER_CODE else num

    def layer_numeric_code(self, layer: str) -> int:
        """Layer numeric code or the 0 sentinel."""
        num = self.table.get_layer_numeric_code(layer)
        if num == UNKNOWN_LAYER_CODE:
            logger.warning("Unknown layer %r, using sentinel %d", layer, UNKNOWN_LAYER_CODE)
        return num

    def layer_code_from_numeric(self, numeric_code: str) -> str:
        code = self.table.get_layer_code_from_numeric(numeric_code)
        if not code:
            logger.warning("Unknown layer numeric code %r", numeric_code)
        return code

    # ------------------------------------------------------------------
    # Strict lookups
    # ------------------------------------------------------------------

    def find_category_numeric_code(self, layer: str, category_code: str) -> Optional[str]:
        override = self.overrides.lookup(layer, category_code)
        if override is not None:
            return override
        item = self.table.find_category(layer, category_code)
        return item.numeric_code if item else None

    def find_category_code(self, layer: str, numeric_code: str) -> Optional[str]:
        code = self.overrides.reverse_lookup(layer, None, numeric_code)
        if code is not None:
            return code
        item = self.table.find_category_by_numeric(layer, numeric_code)
        # an overridden category no longer answers to its table code
        if item is None or self.overrides.lookup(layer, item.code) is not None:
            return None
        return item.code

    def find_subcategory_numeric_code(self, layer: str, category_code: str,
                                      subcategory_code: str) -> Optional[str]:
        override = self.overrides.lookup(layer, category_code, subcategory_code)
        if override is not None:
            return override
        item = self.table.find_subcategory(layer, category_code, subcategory_code)
        return item.numeric_code if item else None

    def find_subcategory_code(self, layer: str, category_code: str,
                              numeric_code: str) -> Optional[str]:
        code = self.overrides.reverse_lookup(layer, category_code, numeric_code)
        if code is not None:
            return code
        item = self.table.find_subcategory_by_numeric(layer, category_code, numeric_code)
        if item is None or self.overrides.lookup(layer, category_code, item.code) is not None:
            return None
        return item.code

    # ------------------------------------------------------------------
    # Graceful lookups
    # ------------------------------------------------------------------

    def category_numeric_code(self, layer: str, category_code: str) -> str:
        """3-digit category code, or the default code on a miss."""
        found = self.find_category_numeric_code(layer, category_code)
        if found is None:
            logger.warning("Category %s.%s not found, defaulting to %s",
                           layer, category_code, self.default_code)
            return self.default_code
        return found

    def category_code_from_numeric(self, layer: str, numeric_code: str) -> str:
        """Alphabetic category code, or '' on a miss."""
        found = self.find_category_code(layer, numeric_code)
        if found is None:
            logger.warning("No category with numeric code %s in layer %s", numeric_code, layer)
            return ""
        return found

    def subcategory_numeric_code(self, layer: str, category_code: str,
                                 subcategory_code: str) -> str:
        """3-digit subcategory code, or the default code on a miss."""
        found = self.find_subcategory_numeric_code(layer, category_code, subcategory_code)
        if found is None:
            logger.warning("Subcategory %s.%s.%s not found, defaulting to %s",
                           layer, category_code, subcategory_code, self.default_code)
            return self.default_code
        return found

    def subcategory_code_from_numeric(self, layer: str, category_code: str,
                                      numeric_code: str) -> str:
        """Alphabetic subcategory code, or '' on a miss."""
        found = self.find_subcategory_code(layer, category_code, numeric_code)
        if found is None:
            logger.warning("No subcategory with numeric code %s in %s.%s",
                           numeric_code, layer, category_code)
            return ""
        return found
