"""Address converter: HFN <-> MFA formatting, conversion and normalization.

Failure policies differ per operation and are part of the contract:

``format_address``
    Live preview. Empty component -> ``""``. Unknown codes resolve to the
    default code (MFA) or stay as given (HFN). Never raises for strings.
``convert_hfn_to_mfa`` / ``convert_mfa_to_hfn``
    Authoritative generation. Any unresolvable segment -> input returned
    unchanged. Callers compare output with input to detect failure.
``normalize_for_display``
    Rewrites only the segments that are in the wrong form and resolve;
    everything else is left as is, which makes it idempotent.

Sequential and extension segments are never interpreted.
"""

import logging
from enum import Enum
from typing import Optional, Union

from nna_taxonomy.mapping.resolver import NumericCodeResolver
from nna_taxonomy.mapping.segments import Segment, classify, join_address, split_address

logger = logging.getLogger(__name__)


class AddressFormat(str, Enum):
    HFN = "hfn"
    MFA = "mfa"

    @classmethod
    def coerce(cls, value: Union["AddressFormat", str]) -> "AddressFormat":
        """Accept the enum or its name/value in any case.

        Raises
        ------
        ValueError
            For anything other than hfn/mfa.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise ValueError(f"Unknown address format {value!r}: expected 'hfn' or 'mfa'")


def _text(value, name: str) -> str:
    """Address components must be given; None is a programming error."""
    if value is None:
        raise TypeError(f"{name} must be a string, not None")
    if isinstance(value, str):
        return value.strip()
    return str(value)


class AddressConverter:
    """Stateless conversions on top of a ``NumericCodeResolver``."""

    def __init__(self, resolver: NumericCodeResolver):
        self.resolver = resolver

    # ------------------------------------------------------------------
    # format
    # ------------------------------------------------------------------

    def format_address(self, layer, category, subcategory, sequential,
                       target: Union[AddressFormat, str] = AddressFormat.HFN) -> str:
        """Build an address in ``target`` form from four components.

        Category and subcategory may each be alphabetic or numeric. Returns
        ``""`` if any component is empty.

        Examples
        --------
        >>> converter.format_address('S', 'POP', 'HPM', '001', 'mfa')
        '2.001.007.001'
        >>> converter.format_address('W', '002', '003', '001', 'hfn')
        'W.STG.FES.001'
        """
        values = [_text(layer, "layer"), _text(category, "category"),
                  _text(subcategory, "subcategory"), _text(sequential, "sequential")]
        target = AddressFormat.coerce(target)
        if not all(values):
            return ""

        layer_seg, cat_seg, sub_seg = (classify(v) for v in values[:3])
        seq = values[3]

        if layer_seg.is_numeric:
            layer_alpha = self.resolver.layer_code_from_numeric(layer_seg.value)
        else:
            layer_alpha = layer_seg.value.upper()

        if cat_seg.is_numeric:
            cat_alpha = self.resolver.category_code_from_numeric(layer_alpha, cat_seg.value)
        else:
            cat_alpha = cat_seg.value.upper()

        if target is AddressFormat.MFA:
            if layer_seg.is_numeric:
                layer_out = str(int(layer_seg.value))
            else:
                layer_out = str(self.resolver.layer_numeric_code(layer_alpha))
            if cat_seg.is_numeric:
                cat_out = self.resolver.pad(cat_seg.value)
            else:
                cat_out = self.resolver.category_numeric_code(layer_alpha, cat_alpha)
            if sub_seg.is_numeric:
                sub_out = self.resolver.pad(sub_seg.value)
            else:
                sub_out = self.resolver.subcategory_numeric_code(layer_alpha, cat_alpha, sub_seg.value)
        else:
            layer_out = (layer_alpha or layer_seg.value) if layer_seg.is_numeric else layer_seg.value
            cat_out = (cat_alpha or cat_seg.value) if cat_seg.is_numeric else cat_seg.value
            if sub_seg.is_numeric:
                sub_out = self.resolver.subcategory_code_from_numeric(
                    layer_alpha, cat_alpha, sub_seg.value) or sub_seg.value
            else:
                sub_out = sub_seg.value

        return join_address(layer_out, cat_out, sub_out, seq)

    # ------------------------------------------------------------------
    # strict conversion
    # ------------------------------------------------------------------

    def convert_hfn_to_mfa(self, hfn, require_sequential: bool = True) -> str:
        """Convert ``L.CAT.SUB.SEQ[.ext...]`` to its MFA.

        Returns ``""`` for empty input and ``hfn`` unchanged when the address
        is malformed or any taxonomy segment does not resolve. With
        ``require_sequential=False`` a three-segment ``L.CAT.SUB`` is accepted.
        """
        hfn = _text(hfn, "hfn")
        if not hfn:
            return ""

        parts = split_address(hfn, min_segments=4 if require_sequential else 3)
        if parts is None:
            logger.warning("Cannot convert %r to MFA: expected LAYER.CATEGORY.SUBCATEGORY.SEQUENTIAL", hfn)
            return hfn

        layer = parts.layer.value.upper()
        layer_num = self.resolver.find_layer_numeric_code(layer)
        if layer_num is None:
            logger.warning("Cannot convert %r to MFA: unknown layer %s", hfn, layer)
            return hfn

        cat_num = self.resolver.find_category_numeric_code(layer, parts.category.value)
        if cat_num is None:
            logger.warning("Cannot convert %r to MFA: unknown category %s.%s",
                           hfn, layer, parts.category.value)
            return hfn

        sub_num = self.resolver.find_subcategory_numeric_code(
            layer, parts.category.value, parts.subcategory.value)
        if sub_num is None:
            logger.warning("Cannot convert %r to MFA: unknown subcategory %s.%s.%s",
                           hfn, layer, parts.category.value, parts.subcategory.value)
            return hfn

        mfa = join_address(str(layer_num), cat_num, sub_num, parts.sequential, parts.extension)
        logger.debug("Converted HFN to MFA: %s -> %s", hfn, mfa)
        return mfa

    def convert_mfa_to_hfn(self, mfa) -> str:
        """Convert ``N.NNN.NNN.SEQ[.ext...]`` to its HFN.

        Returns ``""`` for empty input and ``mfa`` unchanged when the address
        is malformed or any taxonomy segment does not resolve.
        """
        mfa = _text(mfa, "mfa")
        if not mfa:
            return ""

        parts = split_address(mfa, min_segments=4)
        if parts is None or not parts.all_numeric:
            logger.warning("Cannot convert %r to HFN: expected numeric LAYER.CATEGORY.SUBCATEGORY.SEQUENTIAL", mfa)
            return mfa

        layer = self.resolver.table.get_layer_code_from_numeric(parts.layer.value)
        if not layer:
            logger.warning("Cannot convert %r to HFN: unknown layer %s", mfa, parts.layer.value)
            return mfa

        category = self.resolver.find_category_code(layer, parts.category.value)
        if category is None:
            logger.warning("Cannot convert %r to HFN: no category %s in layer %s",
                           mfa, parts.category.value, layer)
            return mfa

        subcategory = self.resolver.find_subcategory_code(layer, category, parts.subcategory.value)
        if subcategory is None:
            logger.warning("Cannot convert %r to HFN: no subcategory %s in %s.%s",
                           mfa, parts.subcategory.value, layer, category)
            return mfa

        hfn = join_address(layer, category, subcategory, parts.sequential, parts.extension)
        logger.debug("Converted MFA to HFN: %s -> %s", mfa, hfn)
        return hfn

    # ------------------------------------------------------------------
    # normalization
    # ------------------------------------------------------------------

    def normalize_for_display(self, address, target: Union[AddressFormat, str] = AddressFormat.HFN) -> str:
        """Rewrite the segments of ``address`` that are not yet in ``target`` form.

        Works on MFA, HFN and mixed addresses such as ``W.002.FES.001``. A
        fully numeric address is converted as a whole when ``target`` is hfn.
        Segments that do not resolve are left untouched.
        """
        address = _text(address, "address")
        target = AddressFormat.coerce(target)
        if not address:
            return ""

        parts = split_address(address, min_segments=3)
        if parts is None:
            return address

        layer_alpha = self._layer_alpha(parts.layer)
        cat_alpha = self._category_alpha(layer_alpha, parts.category)

        if target is AddressFormat.HFN:
            # resolved segments come out as table codes, the rest as given
            layer_out = parts.layer.value
            if layer_alpha and self.resolver.find_layer_numeric_code(layer_alpha) is not None:
                layer_out = layer_alpha
            cat_out = cat_alpha or parts.category.value
            sub_out = parts.subcategory.value
            if cat_alpha and parts.subcategory.is_numeric:
                sub_out = self.resolver.find_subcategory_code(layer_alpha, cat_alpha, sub_out) or sub_out
            elif cat_alpha and self.resolver.find_subcategory_numeric_code(layer_alpha, cat_alpha, sub_out):
                sub_out = sub_out.upper()
        else:
            layer_out = parts.layer.value
            if not parts.layer.is_numeric:
                num = self.resolver.find_layer_numeric_code(layer_alpha)
                layer_out = str(num) if num is not None else layer_out
            cat_out = parts.category.value
            if not parts.category.is_numeric:
                cat_out = self.resolver.find_category_numeric_code(layer_alpha, cat_out) or cat_out
            sub_out = parts.subcategory.value
            if not parts.subcategory.is_numeric and cat_alpha:
                sub_out = self.resolver.find_subcategory_numeric_code(layer_alpha, cat_alpha, sub_out) or sub_out

        normalized = join_address(layer_out, cat_out, sub_out, parts.sequential, parts.extension)
        if self._unresolved(normalized, target):
            logger.warning("Partially normalized %r to %s: %s", address, target.value, normalized)
        return normalized

    def _layer_alpha(self, segment: Segment) -> str:
        if segment.is_numeric:
            return self.resolver.table.get_layer_code_from_numeric(segment.value)
        return segment.value.upper()

    def _category_alpha(self, layer_alpha: str, segment: Segment) -> Optional[str]:
        """Alphabetic category code if the segment resolves (either form)."""
        if not layer_alpha:
            return None
        if segment.is_numeric:
            return self.resolver.find_category_code(layer_alpha, segment.value)
        if self.resolver.find_category_numeric_code(layer_alpha, segment.value) is None:
            return None
        return segment.value.upper()

    @staticmethod
    def _unresolved(address: str, target: AddressFormat) -> bool:
        parts = split_address(address, min_segments=3)
        if parts is None:
            return False
        if target is AddressFormat.HFN:
            return not parts.all_alphabetic
        return not parts.all_numeric
