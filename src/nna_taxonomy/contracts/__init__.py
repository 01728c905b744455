"""Taxonomy contracts - fail-fast enforcement of data integrity.

Contracts fail immediately and loudly when taxonomy data breaks an invariant
that address conversion relies on (see ``invariants.py``).

Key principle:
- Pydantic validates config and document shape
- Contracts validate taxonomy integrity
- The converter handles unresolvable addresses without raising
"""

from nna_taxonomy.contracts.failure import ContractViolation, FailurePolicy
from nna_taxonomy.contracts.base import require
from nna_taxonomy.contracts.taxonomy import assert_unique_codes, find_code_collisions

__all__ = [
    "ContractViolation",
    "FailurePolicy",
    "require",
    "assert_unique_codes",
    "find_code_collisions",
]
