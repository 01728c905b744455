"""HFN/MFA address mapping.

Layers, bottom-up: ``segments`` (tagged parsing), ``overrides`` (override
registry), ``resolver`` (code lookups), ``converter`` (address operations)
and ``mapper`` (the public facade).
"""

from nna_taxonomy.mapping.segments import (
    AddressParts,
    Segment,
    SegmentKind,
    classify,
    join_address,
    split_address,
)
from nna_taxonomy.mapping.overrides import OverrideRegistry
from nna_taxonomy.mapping.resolver import NumericCodeResolver
from nna_taxonomy.mapping.converter import AddressConverter, AddressFormat
from nna_taxonomy.mapping.mapper import TaxonomyMapper, build_mapper

__all__ = [
    'AddressParts',
    'Segment',
    'SegmentKind',
    'classify',
    'join_address',
    'split_address',
    'OverrideRegistry',
    'NumericCodeResolver',
    'AddressConverter',
    'AddressFormat',
    'TaxonomyMapper',
    'build_mapper',
]
