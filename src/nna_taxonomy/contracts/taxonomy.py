"""Taxonomy table contract.

Enforces numeric and alphabetic code uniqueness within each scope. Scopes are
the layer (for categories) and the layer+category pair (for subcategories).
"""

from collections import defaultdict
from typing import Iterable, List, Tuple

from nna_taxonomy.contracts.base import require


def find_code_collisions(entries: Iterable[Tuple[str, str, str]]) -> List[str]:
    """Find codes shared by more than one entry in the same scope.

    Parameters
    ----------
    entries : iterable of (scope, code, numeric_code)
        ``scope`` is e.g. ``"S"`` for a category or ``"S.POP"`` for a
        subcategory.

    Returns
    -------
    list of str
        One message per collision, sorted for stable output.
    """
    by_numeric = defaultdict(list)
    by_code = defaultdict(list)
    for scope, code, numeric_code in entries:
        by_numeric[(scope, numeric_code)].append(code)
        by_code[(scope, code)].append(numeric_code)

    messages = []
    for (scope, numeric_code), codes in by_numeric.items():
        if len(codes) > 1:
            messages.append(
                f"Numeric code collision in {scope}: {numeric_code} used by {', '.join(codes)}"
            )
    for (scope, code), numerics in by_code.items():
        if len(numerics) > 1:
            messages.append(
                f"Duplicate code in {scope}: {code} listed {len(numerics)} times"
            )
    return sorted(messages)


def assert_unique_codes(entries: Iterable[Tuple[str, str, str]]) -> None:
    """Enforce code uniqueness for a loaded table.

    Raises
    ------
    ContractViolation
        If any scope holds two entries with the same numeric or alphabetic code.
    """
    collisions = find_code_collisions(entries)
    require(
        not collisions,
        "Taxonomy contract violated: " + "; ".join(collisions),
    )
