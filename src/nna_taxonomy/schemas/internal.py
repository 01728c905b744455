"""InternalConfig: Authoritative runtime configuration.

This is the ONLY config schema that runtime code sees. It is fully validated,
normalized, and immutable.
"""

from typing import Literal, Optional
from pydantic import Field, ConfigDict, field_validator
from nna_taxonomy.contracts.failure import FailurePolicy
from nna_taxonomy.schemas.base import NNABaseModel
from nna_taxonomy.schemas.param import normalize_override_key, normalize_override_value


class InternalTaxonomyConfig(NNABaseModel):
    """Runtime taxonomy source configuration."""
    source: Optional[str]
    collision_policy: FailurePolicy


class InternalResolverConfig(NNABaseModel):
    """Runtime resolver configuration."""
    default_code: str = Field(pattern=r"^\d+$")
    code_width: int = Field(ge=1, le=6)


class InternalCacheConfig(NNABaseModel):
    """Runtime cache configuration."""
    enabled: bool


class InternalLoggingConfig(NNABaseModel):
    """Runtime logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class InternalConfig(NNABaseModel):
    """Authoritative runtime configuration.
    
    Usage
    -----
    Runtime modules receive InternalConfig and access fields directly:
    
        def __init__(self, config: InternalConfig):
            self.default_code = config.resolver.default_code  # NOT .get()
    """
    
    taxonomy: InternalTaxonomyConfig
    resolver: InternalResolverConfig
    overrides: dict[str, str]
    cache: InternalCacheConfig
    logging: InternalLoggingConfig
    
    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        use_enum_values=True,
        str_strip_whitespace=True,
        frozen=True,  # Immutable after construction
    )

    @field_validator("overrides", mode="before")
    @classmethod
    def normalize_overrides(cls, v):
        """User overrides arrive un-normalized after merging.

        A None value removes the key; later entries win over earlier ones.
        """
        overrides = {}
        for key, value in dict(v).items():
            key = normalize_override_key(key)
            if value is None:
                overrides.pop(key, None)
            else:
                overrides[key] = normalize_override_value(value)
        return overrides
