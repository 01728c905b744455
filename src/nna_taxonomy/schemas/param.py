"""ParamConfig: Expert defaults for the NNA taxonomy mapper.

This module defines the complete default configuration, including the
packaged override registry. No runtime code defines fallback values; this
is the single source of truth for defaults.

Runtime code NEVER reads from ParamConfig directly - it only receives InternalConfig.
"""

import re
from typing import Literal, Optional
from pydantic import Field, field_validator
from nna_taxonomy.contracts.failure import FailurePolicy
from nna_taxonomy.schemas.base import NNABaseModel


# Corrections for subcategories whose agreed numeric identity must not
# drift with the table's listing. Keys are "LAYER.CATEGORY[.SUBCATEGORY]".
DEFAULT_OVERRIDES = {
    "S.POP.HPM": "007",
    "W.BCH.SUN": "003",
}

_OVERRIDE_KEY = re.compile(r"^[A-Z]\.[A-Z0-9_]+(\.[A-Z0-9_]+)?$")


def normalize_override_key(key: str) -> str:
    """Uppercase and validate an override key.

    Raises
    ------
    ValueError
        If the key is not ``L.CAT`` or ``L.CAT.SUB``.
    """
    norm = str(key).strip().upper()
    if not _OVERRIDE_KEY.match(norm):
        raise ValueError(
            f"Invalid override key {key!r}: expected 'LAYER.CATEGORY' or 'LAYER.CATEGORY.SUBCATEGORY'"
        )
    return norm


def normalize_override_value(value) -> str:
    """Validate an override numeric code (digits only, padding optional)."""
    norm = str(value).strip()
    if not norm.isdigit():
        raise ValueError(f"Invalid override code {value!r}: expected digits")
    return norm


# =============================================================================
# Nested Configuration Models
# =============================================================================

class TaxonomySourceConfig(NNABaseModel):
    """Where the taxonomy table comes from and how integrity bugs are handled."""
    source: Optional[str] = Field(None, description="Path to taxonomy JSON; None uses packaged data")
    collision_policy: FailurePolicy = FailurePolicy.FAIL_FAST


class ResolverConfig(NNABaseModel):
    """Numeric code resolver defaults."""
    default_code: str = Field("001", description="Code returned when a lookup misses")
    code_width: int = Field(3, ge=1, le=6, description="Zero-padding width of category/subcategory codes")

    @field_validator("default_code", mode="before")
    @classmethod
    def digits_only(cls, v):
        """Accept int or digit string for the default code."""
        return normalize_override_value(v)


class CacheConfig(NNABaseModel):
    """Memoization of conversions."""
    enabled: bool = True


class LoggingConfig(NNABaseModel):
    """Logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, v):
        if isinstance(v, str):
            return v.upper().strip()
        return v


# =============================================================================
# Main ParamConfig
# =============================================================================

class ParamConfig(NNABaseModel):
    """Expert configuration for the taxonomy mapper.
    
    All parameters have defaults. User and CLI configs override selectively.
    
    Usage
    -----
        param = ParamConfig()
        internal = resolve_config(param, user_cfg, cli_cfg)
    """
    
    taxonomy: TaxonomySourceConfig = Field(default_factory=TaxonomySourceConfig)
    resolver: ResolverConfig = Field(default_factory=ResolverConfig)
    overrides: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_OVERRIDES))
    cache: CacheConfig = Field(default_factory=CacheConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("overrides", mode="before")
    @classmethod
    def normalize_overrides(cls, v):
        """Uppercase keys and validate codes."""
        if v is None:
            return {}
        return {normalize_override_key(k): normalize_override_value(val) for k, val in dict(v).items()}
