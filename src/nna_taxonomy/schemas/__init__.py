"""Pydantic schemas for the NNA taxonomy mapper.

Exports
-------
resolve_config : function
    Single entrypoint for configuration resolution
InternalConfig : class
    Fully validated, authoritative runtime configuration
ParamConfig : class
    Expert defaults (complete)
UserConfig : class
    User-facing configuration (forgiving, minimal)
CLIConfig : class
    Command-line operational overrides
TaxonomyDocument, LayerItem, TaxonomyItem, AddressMapping : class
    Taxonomy document records and public items
"""

from nna_taxonomy.schemas.resolve import resolve_config
from nna_taxonomy.schemas.internal import InternalConfig
from nna_taxonomy.schemas.param import ParamConfig, DEFAULT_OVERRIDES
from nna_taxonomy.schemas.user import UserConfig
from nna_taxonomy.schemas.cli import CLIConfig
from nna_taxonomy.schemas.taxonomy import (
    TaxonomyDocument,
    LayerRecord,
    CategoryRecord,
    SubcategoryRecord,
    LayerItem,
    TaxonomyItem,
    AddressMapping,
)

__all__ = [
    'resolve_config',
    'InternalConfig',
    'ParamConfig',
    'DEFAULT_OVERRIDES',
    'UserConfig',
    'CLIConfig',
    'TaxonomyDocument',
    'LayerRecord',
    'CategoryRecord',
    'SubcategoryRecord',
    'LayerItem',
    'TaxonomyItem',
    'AddressMapping',
]
