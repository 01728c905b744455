"""Base contract enforcement utilities.

The require() function is the single enforcement mechanism for all contracts.
"""

from nna_taxonomy.contracts.failure import ContractViolation


def require(condition: bool, message: str) -> None:
    """Enforce a taxonomy contract.

    Parameters
    ----------
    condition : bool
        The invariant that must be true. If False, ContractViolation is raised.

    message : str
        Error message explaining the contract violation (for debugging).

    Raises
    ------
    ContractViolation
        If condition is False.

    Examples
    --------
    >>> require(len(layers) > 0, "Taxonomy contract: at least one layer expected")
    """
    if not condition:
        raise ContractViolation(message)
