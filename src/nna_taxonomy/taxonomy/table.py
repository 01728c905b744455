"""Taxonomy table: indexed, read-only view of a taxonomy document.

The table answers the questions address conversion needs: which categories
a layer has, which subcategories a (layer, category) has, and how alphabetic
and numeric codes map to each other within those scopes.

Validation at construction is advisory. Entries missing a name or numeric
code, or categories with no subcategories, are collected into ``issues`` and
logged; they never block construction. Code collisions are different: they
make reverse lookups ambiguous, so they are handled by the configured
``FailurePolicy`` (raise by default).
"""

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, List, Optional, Tuple, Union

from nna_taxonomy.constants import CODE_WIDTH, LAYERS, LAYER_ALPHA_CODES, LAYER_NUMERIC_CODES, UNKNOWN_LAYER_CODE
from nna_taxonomy.contracts import FailurePolicy, assert_unique_codes, find_code_collisions
from nna_taxonomy.schemas.taxonomy import LayerItem, SubcategoryRecord, TaxonomyDocument, TaxonomyItem
from nna_taxonomy.taxonomy.loader import load_document

logger = logging.getLogger(__name__)


def _numeric_key(numeric_code) -> Optional[int]:
    """Numeric codes compare by value: '7', '07' and '007' are the same code."""
    text = str(numeric_code).strip()
    if not text.isascii() or not text.isdigit():
        return None
    return int(text)


class TaxonomyTable:
    """Read-only taxonomy lookups built once from a ``TaxonomyDocument``.

    Parameters
    ----------
    document : TaxonomyDocument
        Validated taxonomy document.
    collision_policy : FailurePolicy or str
        ``fail_fast`` raises ``ContractViolation`` on duplicate codes within a
        scope; ``warn_only`` records them as issues and keeps the first entry.
    code_width : int
        Zero-padding width of category and subcategory numeric codes.
    """

    def __init__(
        self,
        document: TaxonomyDocument,
        collision_policy: Union[FailurePolicy, str] = FailurePolicy.FAIL_FAST,
        code_width: int = CODE_WIDTH,
    ):
        self.version = document.version
        self.code_width = code_width
        self.collision_policy = FailurePolicy(collision_policy)

        issues: List[str] = []
        layer_names = {code: name for code, name, _ in LAYERS}
        categories: Dict[str, Tuple[TaxonomyItem, ...]] = {}
        subcategories: Dict[Tuple[str, str], Tuple[TaxonomyItem, ...]] = {}
        entries: List[Tuple[str, str, str]] = []

        for layer in document.layers:
            if layer.name:
                layer_names[layer.code] = layer.name
            cat_items = []
            for pos, cat in enumerate(layer.categories):
                item = self._make_item(cat, pos, layer.code, issues)
                if item is None:
                    continue
                entries.append((layer.code, item.code, item.numeric_code))
                # a repeated code is reported as a collision; the first listing is kept
                if any(kept.code == item.code for kept in cat_items):
                    continue
                cat_items.append(item)

                if not cat.subcategories:
                    issues.append(f"{layer.code}.{item.code}: empty subcategory list")
                sub_items = []
                for sub_pos, sub in enumerate(cat.subcategories):
                    sub_item = self._make_item(sub, sub_pos, f"{layer.code}.{item.code}", issues)
                    if sub_item is None:
                        continue
                    entries.append((f"{layer.code}.{item.code}", sub_item.code, sub_item.numeric_code))
                    if any(kept.code == sub_item.code for kept in sub_items):
                        continue
                    sub_items.append(sub_item)
                subcategories[(layer.code, item.code)] = tuple(sub_items)
            categories[layer.code] = tuple(cat_items)

        if self.collision_policy == FailurePolicy.FAIL_FAST:
            assert_unique_codes(entries)
        else:
            issues.extend(find_code_collisions(entries))

        self._layers = tuple(
            LayerItem(code=code, name=layer_names[code], numeric_code=num) for code, _, num in LAYERS
        )
        self._categories = MappingProxyType(categories)
        self._subcategories = MappingProxyType(subcategories)
        self._build_indices()
        self.issues: Tuple[str, ...] = tuple(issues)

        for issue in self.issues:
            logger.warning("Taxonomy issue: %s", issue)
        logger.info(
            "Taxonomy table ready: %d categories, %d subcategories, %d issues",
            sum(len(c) for c in categories.values()),
            sum(len(s) for s in subcategories.values()),
            len(self.issues),
        )

    @classmethod
    def load(
        cls,
        source: Optional[Union[str, Path]] = None,
        collision_policy: Union[FailurePolicy, str] = FailurePolicy.FAIL_FAST,
        code_width: int = CODE_WIDTH,
    ) -> "TaxonomyTable":
        """Load a document (packaged when ``source`` is None) and build the table."""
        return cls(load_document(source), collision_policy=collision_policy, code_width=code_width)

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    def _make_item(self, record: SubcategoryRecord, pos: int, scope: str,
                   issues: List[str]) -> Optional[TaxonomyItem]:
        """Turn a record into an item, filling gaps from its listing position."""
        if not record.code:
            issues.append(f"{scope}: entry #{pos + 1} missing code (skipped)")
            return None
        code = record.code.upper()

        numeric = _numeric_key(record.numeric_code) if record.numeric_code is not None else None
        if numeric is None:
            numeric = pos + 1
            if record.numeric_code is None:
                issues.append(f"{scope}.{code}: missing numericCode, using position {numeric}")
            else:
                issues.append(
                    f"{scope}.{code}: invalid numericCode {record.numeric_code!r}, using position {numeric}"
                )

        name = record.name
        if not name:
            name = code.replace("_", " ")
            issues.append(f"{scope}.{code}: missing name")

        return TaxonomyItem(code=code, numeric_code=self.pad(numeric), name=name)

    def _build_indices(self) -> None:
        # setdefault keeps the first entry when warn_only let a collision through
        cat_by_code, cat_by_num = {}, {}
        for layer, items in self._categories.items():
            for item in items:
                cat_by_code.setdefault((layer, item.code), item)
                cat_by_num.setdefault((layer, int(item.numeric_code)), item)

        sub_by_code, sub_by_num = {}, {}
        for (layer, cat), items in self._subcategories.items():
            for item in items:
                sub_by_code.setdefault((layer, cat, item.code), item)
                sub_by_num.setdefault((layer, cat, int(item.numeric_code)), item)

        self._cat_by_code = MappingProxyType(cat_by_code)
        self._cat_by_num = MappingProxyType(cat_by_num)
        self._sub_by_code = MappingProxyType(sub_by_code)
        self._sub_by_num = MappingProxyType(sub_by_num)

    def pad(self, numeric: int) -> str:
        """Zero-pad a numeric code to the table's code width."""
        return str(numeric).zfill(self.code_width)

    # ------------------------------------------------------------------
    # Layer accessors
    # ------------------------------------------------------------------

    def get_layers(self) -> List[LayerItem]:
        """All layers of the fixed NNA set, in numeric order."""
        return list(self._layers)

    def get_layer_numeric_code(self, layer: str) -> int:
        """Numeric code of a layer, or 0 for unrecognized layers.

        0 is a "not found" sentinel; layer numeric codes start at 1.
        """
        return LAYER_NUMERIC_CODES.get(str(layer).strip().upper(), UNKNOWN_LAYER_CODE)

    def get_layer_code_from_numeric(self, numeric_code) -> str:
        """Alphabetic layer code for a numeric code, or ''."""
        key = _numeric_key(numeric_code)
        if key is None:
            return ""
        return LAYER_ALPHA_CODES.get(key, "")

    # ------------------------------------------------------------------
    # Category / subcategory accessors
    # ------------------------------------------------------------------

    def get_categories(self, layer: str) -> List[TaxonomyItem]:
        """Categories of a layer in listing order; [] for unknown layers."""
        items = self._categories.get(str(layer).strip().upper())
        if items is None:
            logger.debug("No categories for layer %r", layer)
            return []
        return list(items)

    def get_subcategories(self, layer: str, category: str) -> List[TaxonomyItem]:
        """Subcategories of (layer, category); [] for unknown layer or category."""
        key = (str(layer).strip().upper(), str(category).strip().upper())
        items = self._subcategories.get(key)
        if items is None:
            logger.debug("No subcategories for %s.%s", *key)
            return []
        return list(items)

    def find_category(self, layer: str, code: str) -> Optional[TaxonomyItem]:
        return self._cat_by_code.get((layer.upper(), code.upper()))

    def find_category_by_numeric(self, layer: str, numeric_code) -> Optional[TaxonomyItem]:
        key = _numeric_key(numeric_code)
        if key is None:
            return None
        return self._cat_by_num.get((layer.upper(), key))

    def find_subcategory(self, layer: str, category: str, code: str) -> Optional[TaxonomyItem]:
        return self._sub_by_code.get((layer.upper(), category.upper(), code.upper()))

    def find_subcategory_by_numeric(self, layer: str, category: str,
                                    numeric_code) -> Optional[TaxonomyItem]:
        key = _numeric_key(numeric_code)
        if key is None:
            return None
        return self._sub_by_num.get((layer.upper(), category.upper(), key))

    def has_triple(self, layer: str, category: str, subcategory: str) -> bool:
        """True when (layer, category, subcategory) is listed in the table."""
        return self.find_subcategory(layer, category, subcategory) is not None

    def iter_triples(self) -> Iterator[Tuple[str, TaxonomyItem, TaxonomyItem]]:
        """Yield (layer, category, subcategory) for every listed subcategory."""
        for layer, cats in self._categories.items():
            for cat in cats:
                for sub in self._subcategories.get((layer, cat.code), ()):
                    yield layer, cat, sub

    def counts(self) -> Dict[str, Dict[str, int]]:
        """Per-layer category and subcategory counts."""
        out = {}
        for layer in self._layers:
            cats = self._categories.get(layer.code, ())
            out[layer.code] = {
                "categories": len(cats),
                "subcategories": sum(
                    len(self._subcategories.get((layer.code, c.code), ())) for c in cats
                ),
            }
        return out
