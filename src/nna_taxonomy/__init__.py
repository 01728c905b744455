"""`nna_taxonomy` - HFN/MFA address mapping for the NNA asset taxonomy.

Subpackages:
- taxonomy: Taxonomy table loading and validation
- mapping: Override registry, numeric code resolver, address converter
- schemas: Pydantic configuration and data models
- contracts: Data-integrity enforcement
- cli: Developer command-line tools
"""

from nna_taxonomy.mapping import TaxonomyMapper, build_mapper, AddressFormat

__version__ = "0.1.0"

__all__ = ["TaxonomyMapper", "build_mapper", "AddressFormat", "__version__"]
