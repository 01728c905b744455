"""Taxonomy table loading and lookups."""

from nna_taxonomy.taxonomy.loader import load_document
from nna_taxonomy.taxonomy.table import TaxonomyTable

__all__ = ["TaxonomyTable", "load_document"]
