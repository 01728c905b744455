"""Taxonomy document and public item schemas.

Two groups of models live here:

- Records (``LayerRecord``, ``CategoryRecord``, ``SubcategoryRecord``,
  ``TaxonomyDocument``) describe the on-disk JSON document. Category and
  subcategory fields are optional on purpose: incomplete entries are
  reported as issues by the table loader instead of failing validation.
- Items (``LayerItem``, ``TaxonomyItem``, ``AddressMapping``) are the frozen
  values handed to callers.
"""

from typing import Optional
from pydantic import Field, field_validator, model_validator

from nna_taxonomy.constants import LAYER_NUMERIC_CODES
from nna_taxonomy.schemas.base import NNABaseModel, FrozenModel


# =============================================================================
# Document records
# =============================================================================

class SubcategoryRecord(NNABaseModel):
    """Subcategory entry as listed under a category."""
    code: Optional[str] = None
    name: Optional[str] = None
    numeric_code: Optional[str] = Field(None, alias="numericCode")

    model_config = NNABaseModel.model_config.copy()
    model_config.update({"populate_by_name": True, "extra": "ignore"})

    @field_validator("numeric_code", mode="before")
    @classmethod
    def coerce_numeric_code(cls, v):
        """Accept ints for numeric codes, keep strings as given."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class CategoryRecord(SubcategoryRecord):
    """Category entry with its ordered subcategory listing."""
    subcategories: list[SubcategoryRecord] = Field(default_factory=list)


class LayerRecord(NNABaseModel):
    """Layer entry. Layers belong to the fixed NNA set."""
    code: str
    name: Optional[str] = None
    numeric_code: Optional[int] = Field(None, alias="numericCode")
    categories: list[CategoryRecord] = Field(default_factory=list)

    model_config = NNABaseModel.model_config.copy()
    model_config.update({"populate_by_name": True, "extra": "ignore"})

    @field_validator("code")
    @classmethod
    def known_layer(cls, v: str) -> str:
        v = v.upper()
        if v not in LAYER_NUMERIC_CODES:
            raise ValueError(f"Unknown layer code: {v!r}")
        return v

    @model_validator(mode="before")
    @classmethod
    def fixed_numeric_code(cls, data):
        """Layer numeric codes are fixed; a document may omit but not change them."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        code = str(data.get("code", "")).strip().upper()
        expected = LAYER_NUMERIC_CODES.get(code)
        if expected is None:
            return data
        given = data.pop("numericCode", None)
        given = data.pop("numeric_code", given)
        if given is not None and int(given) != expected:
            raise ValueError(f"Layer {code} must have numeric code {expected}, got {given}")
        data["numeric_code"] = expected
        return data


class TaxonomyDocument(NNABaseModel):
    """Root of a taxonomy JSON document."""
    version: Optional[str] = None
    layers: list[LayerRecord]

    model_config = NNABaseModel.model_config.copy()
    model_config.update({"extra": "ignore"})

    @field_validator("layers")
    @classmethod
    def unique_layers(cls, v: list[LayerRecord]) -> list[LayerRecord]:
        codes = [layer.code for layer in v]
        dupes = sorted({c for c in codes if codes.count(c) > 1})
        if dupes:
            raise ValueError(f"Duplicate layers in taxonomy document: {dupes}")
        return v


# =============================================================================
# Public items
# =============================================================================

class LayerItem(FrozenModel):
    """A layer as exposed to callers."""
    code: str
    name: str
    numeric_code: int


class TaxonomyItem(FrozenModel):
    """A category or subcategory as exposed to callers."""
    code: str
    numeric_code: str
    name: str


class AddressMapping(FrozenModel):
    """One HFN/MFA pair with the display names of its taxonomy segments."""
    hfn: str
    mfa: str
    category: str
    subcategory: str
