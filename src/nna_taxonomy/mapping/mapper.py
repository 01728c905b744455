"""TaxonomyMapper: the public HFN/MFA mapping facade.

Wires the taxonomy table, override registry, numeric code resolver and
address converter together from one ``InternalConfig``. Everything is built
at construction and read-only afterwards; the only mutable state is the
optional lookup cache, which is dropped on ``clear_cache()`` or ``reload()``
and never implicitly.
"""

import logging
from typing import Dict, List, Optional, Tuple, Union, TYPE_CHECKING

from nna_taxonomy.mapping.converter import AddressConverter, AddressFormat
from nna_taxonomy.mapping.overrides import OverrideRegistry
from nna_taxonomy.mapping.resolver import NumericCodeResolver
from nna_taxonomy.mapping.segments import join_address, split_address
from nna_taxonomy.schemas import AddressMapping, LayerItem, TaxonomyItem, resolve_config
from nna_taxonomy.taxonomy import TaxonomyTable

if TYPE_CHECKING:
    from nna_taxonomy.schemas import InternalConfig

__all__ = ["TaxonomyMapper", "build_mapper"]

logger = logging.getLogger(__name__)


class TaxonomyMapper:
    """Bidirectional HFN/MFA mapper over an immutable taxonomy.

    Parameters
    ----------
    config : InternalConfig, optional
        Resolved configuration. None uses ``resolve_config()`` defaults.
    table : TaxonomyTable, optional
        Prebuilt table. When given, ``config.taxonomy`` is not read.
    overrides : OverrideRegistry, optional
        Prebuilt registry. When given, ``config.overrides`` is not read.

    Attributes
    ----------
    issues : tuple of str
        Advisory problems found in the table and the override registry.

    Examples
    --------
    >>> mapper = TaxonomyMapper()
    >>> mapper.format_address('S', 'POP', 'HPM', '001', 'mfa')
    '2.001.007.001'
    >>> mapper.convert_mfa_to_hfn('5.002.003.001')
    'W.STG.FES.001'
    """

    def __init__(self, config: Optional["InternalConfig"] = None,
                 table: Optional[TaxonomyTable] = None,
                 overrides: Optional[OverrideRegistry] = None):
        self.config = config if config is not None else resolve_config()
        self._given_table = table
        self._given_overrides = overrides
        self._cache: Dict[Tuple, object] = {}
        self._build()

    def _build(self) -> None:
        resolver_cfg = self.config.resolver
        if self._given_table is not None:
            self.table = self._given_table
        else:
            self.table = TaxonomyTable.load(
                self.config.taxonomy.source,
                collision_policy=self.config.taxonomy.collision_policy,
                code_width=resolver_cfg.code_width,
            )
        if self._given_overrides is not None:
            self.overrides = self._given_overrides
        else:
            self.overrides = OverrideRegistry(self.config.overrides, code_width=resolver_cfg.code_width)

        self.resolver = NumericCodeResolver(self.table, self.overrides, resolver_cfg.default_code)
        self.converter = AddressConverter(self.resolver)
        self.issues: Tuple[str, ...] = self.table.issues + tuple(self.overrides.check_against(self.table))
        logger.info("TaxonomyMapper ready (taxonomy v%s, %d overrides, %d issues)",
                    self.table.version, len(self.overrides), len(self.issues))

    @property
    def cache_enabled(self) -> bool:
        return self.config.cache.enabled

    def _cached(self, key: Tuple, compute, keep=bool):
        """Memoize ``compute()`` under ``key`` when ``keep(result)`` holds.

        Misses are never stored, so unresolvable input cannot grow the cache.
        """
        if not self.cache_enabled:
            return compute()
        if key in self._cache:
            return self._cache[key]
        result = compute()
        if keep(result):
            self._cache[key] = result
        return result

    def clear_cache(self) -> None:
        """Drop memoized lookups."""
        logger.debug("Clearing %d cached lookups", len(self._cache))
        self._cache.clear()

    def reload(self) -> None:
        """Re-read the taxonomy source and rebuild every component.

        A table or registry passed to the constructor is reused as is.
        """
        logger.info("Reloading taxonomy")
        self.clear_cache()
        self._build()

    # ------------------------------------------------------------------
    # Table accessors
    # ------------------------------------------------------------------

    def get_layers(self) -> List[LayerItem]:
        return self.table.get_layers()

    def get_categories(self, layer: str) -> List[TaxonomyItem]:
        """Categories of ``layer``; [] for an unknown layer."""
        items = self._cached(("categories", layer.strip().upper()), lambda: self.table.get_categories(layer))
        return list(items)

    def get_subcategories(self, layer: str, category: str) -> List[TaxonomyItem]:
        """Subcategories of (layer, category); [] if either is unknown."""
        key = ("subcategories", layer.strip().upper(), category.strip().upper())
        items = self._cached(key, lambda: self.table.get_subcategories(layer, category))
        return list(items)

    def get_layer_numeric_code(self, layer: str) -> int:
        """Layer numeric code (1-10), or 0 for unknown layers."""
        return self.table.get_layer_numeric_code(layer)

    def get_layer_code_from_numeric(self, numeric_code) -> str:
        return self.table.get_layer_code_from_numeric(numeric_code)

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def format_address(self, layer, category, subcategory, sequential,
                       target: Union[AddressFormat, str] = AddressFormat.HFN) -> str:
        """See ``AddressConverter.format_address``."""
        return self.converter.format_address(layer, category, subcategory, sequential, target)

    def convert_hfn_to_mfa(self, hfn, require_sequential: bool = True) -> str:
        """See ``AddressConverter.convert_hfn_to_mfa``."""
        if not isinstance(hfn, str):
            return self.converter.convert_hfn_to_mfa(hfn, require_sequential)
        hfn = hfn.strip()
        return self._cached(
            ("hfn_to_mfa", hfn, require_sequential),
            lambda: self.converter.convert_hfn_to_mfa(hfn, require_sequential),
            keep=lambda mfa: bool(mfa) and mfa != hfn,
        )

    def convert_mfa_to_hfn(self, mfa) -> str:
        """See ``AddressConverter.convert_mfa_to_hfn``."""
        if not isinstance(mfa, str):
            return self.converter.convert_mfa_to_hfn(mfa)
        mfa = mfa.strip()
        return self._cached(
            ("mfa_to_hfn", mfa),
            lambda: self.converter.convert_mfa_to_hfn(mfa),
            keep=lambda hfn: bool(hfn) and hfn != mfa,
        )

    def normalize_for_display(self, address, target: Union[AddressFormat, str] = AddressFormat.HFN) -> str:
        """See ``AddressConverter.normalize_for_display``."""
        return self.converter.normalize_for_display(address, target)

    # ------------------------------------------------------------------
    # Validation helpers
    # ------------------------------------------------------------------

    def validate_hfn(self, hfn: str) -> bool:
        """True when the HFN's layer, category and subcategory all exist in the table.

        This is the strict existence check to run before trusting output of
        ``format_address``.
        """
        parts = split_address(hfn, min_segments=3)
        if parts is None or not parts.all_alphabetic:
            return False
        return self.table.has_triple(parts.layer.value, parts.category.value, parts.subcategory.value)

    def generate_all_mappings(self, layer: str, sequential: str = "001") -> List[AddressMapping]:
        """Every HFN/MFA pair of ``layer``, in table order; [] for unknown layers."""
        layer = layer.strip().upper()
        layer_num = self.get_layer_numeric_code(layer)
        rows = []
        for category in self.get_categories(layer):
            for sub in self.get_subcategories(layer, category.code):
                hfn = join_address(layer, category.code, sub.code, sequential)
                mfa = join_address(
                    str(layer_num),
                    self.resolver.category_numeric_code(layer, category.code),
                    self.resolver.subcategory_numeric_code(layer, category.code, sub.code),
                    sequential,
                )
                rows.append(AddressMapping(hfn=hfn, mfa=mfa, category=category.name, subcategory=sub.name))
        return rows

    def round_trip_failures(self) -> List[str]:
        """HFNs of listed triples that do not survive HFN -> MFA -> HFN."""
        failures = []
        for layer, category, sub in self.table.iter_triples():
            hfn = join_address(layer, category.code, sub.code, "001")
            back = self.convert_mfa_to_hfn(self.convert_hfn_to_mfa(hfn))
            if back != hfn:
                failures.append(hfn)
        if failures:
            logger.warning("%d taxonomy entries fail round-trip conversion", len(failures))
        return failures


def build_mapper(param_cfg=None, user_cfg=None, cli_cfg=None) -> TaxonomyMapper:
    """Resolve configuration (Param < User < CLI) and construct a mapper.

    Parameters
    ----------
    param_cfg, user_cfg, cli_cfg : dict or config model, optional
        Passed straight to ``resolve_config``.

    Raises
    ------
    pydantic.ValidationError
        If any config layer is invalid.
    """
    return TaxonomyMapper(resolve_config(param_cfg, user_cfg, cli_cfg))
