"""UserConfig: Forgiving, minimal user-facing configuration.

This schema accepts user inputs with aliases for common naming patterns
(e.g., TAXONOMY_PATH → taxonomy_path, LOG_LEVEL → log_level).

UserConfig is intentionally minimal - users only specify what they want
to override from the expert defaults.
"""

from typing import Literal, Optional
from pydantic import Field, field_validator
from nna_taxonomy.contracts.failure import FailurePolicy
from nna_taxonomy.schemas.base import NNABaseModel


class UserConfig(NNABaseModel):
    """User-facing configuration schema.
    
    Overrides given here are merged over the packaged registry, so a user
    file only lists the corrections it adds or changes. An entry mapped to
    None removes that key from the registry; an empty OVERRIDES dict
    changes nothing.
    
    Usage
    -----
        user_cfg = UserConfig(
            TAXONOMY_PATH="/data/nna/taxonomy_v1.4.json",
            OVERRIDES={"G.POP.TSW": "012"},
            LOG_LEVEL="debug",
        )
        
        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """
    
    taxonomy_path: Optional[str] = Field(None, alias="TAXONOMY_PATH")
    collision_policy: Optional[FailurePolicy] = Field(None, alias="COLLISION_POLICY")
    overrides: Optional[dict[str, Optional[str]]] = Field(None, alias="OVERRIDES")
    default_code: Optional[str] = Field(None, alias="DEFAULT_CODE")
    cache_enabled: Optional[bool] = Field(None, alias="CACHE_ENABLED")
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = Field(None, alias="LOG_LEVEL")
    
    model_config = NNABaseModel.model_config.copy()
    # Allow forgiving input dictionaries (ignore unknown legacy keys)
    model_config.update({"populate_by_name": True, "extra": "ignore"})

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_level(cls, v):
        """Accept lowercase level names."""
        if isinstance(v, str):
            return v.upper().strip()
        return v

    @field_validator("collision_policy", mode="before")
    @classmethod
    def lower_policy(cls, v):
        """Accept FAIL_FAST / warn_only in any case."""
        if isinstance(v, str):
            return v.lower().strip()
        return v

    @field_validator("overrides", mode="before")
    @classmethod
    def stringify_codes(cls, v):
        """Accept int override codes (leading zeros are restored later).

        None marks a packaged override for removal.
        """
        if isinstance(v, dict):
            return {k: None if val is None else str(val) for k, val in v.items()}
        return v

    @field_validator("default_code", mode="before")
    @classmethod
    def stringify_default(cls, v):
        if v is not None:
            return str(v)
        return v
    
    def to_internal_overrides(self) -> dict:
        """Convert flat UserConfig to nested InternalConfig structure.
        
        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides = {}
        
        taxonomy = {}
        if self.taxonomy_path is not None:
            taxonomy["source"] = self.taxonomy_path
        if self.collision_policy is not None:
            taxonomy["collision_policy"] = self.collision_policy
        if taxonomy:
            overrides["taxonomy"] = taxonomy
        
        if self.overrides:
            overrides["overrides"] = dict(self.overrides)
        
        if self.default_code is not None:
            overrides["resolver"] = {"default_code": self.default_code}
        
        if self.cache_enabled is not None:
            overrides["cache"] = {"enabled": self.cache_enabled}
        
        if self.log_level is not None:
            overrides["logging"] = {"level": self.log_level}
        
        return overrides
