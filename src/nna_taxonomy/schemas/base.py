"""Base Pydantic model with strict defaults for NNA taxonomy schemas.

All configuration and taxonomy schemas inherit from this base to ensure
consistent validation behavior.
"""

from pydantic import BaseModel, ConfigDict


class NNABaseModel(BaseModel):
    """Base model for all NNA taxonomy schemas.
    
    Enforces strict validation:
    - No extra fields allowed
    - Validates assignments after initialization
    - Uses enum values rather than enum members
    - Strips surrounding whitespace from strings
    """
    
    model_config = ConfigDict(
        extra='forbid',           # Reject unknown fields
        validate_assignment=True, # Validate on field mutation
        use_enum_values=True,     # Convert enums to values
        str_strip_whitespace=True,# Strip whitespace from strings
    )


class FrozenModel(NNABaseModel):
    """Immutable variant used for runtime values shared across callers."""

    model_config = ConfigDict(
        extra='forbid',
        use_enum_values=True,
        str_strip_whitespace=True,
        frozen=True,
    )
