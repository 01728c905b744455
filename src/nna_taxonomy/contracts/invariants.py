"""Formal taxonomy invariants.

This file documents what the table and the converter MUST guarantee.
Use it as a reviewer anchor and system reference.
"""

TAXONOMY_INVARIANTS = {
    "table": [
        "Layer codes belong to the fixed set G S L M W B P T C R with numeric codes 1..10",
        "Category numeric codes are unique within their layer",
        "Subcategory numeric codes are unique within their (layer, category)",
        "Alphabetic codes are unique within the same scopes",
        "Table and override registry are read-only after load",
    ],

    "overrides": [
        "An override for (layer, category, subcategory) always wins over the table value",
        "Reverse lookups consult the registry before the table",
        "Table entries that are overridden are never matched by their table value",
    ],

    "converter": [
        "HFN -> MFA -> HFN is the identity for every triple in the table",
        "Sequential and trailing extension segments pass through unchanged",
        "format_address never raises for well-shaped input; unknown codes become the default code",
        "convert_* return the input unchanged when any segment does not resolve",
        "normalize_for_display is idempotent",
    ],
}

# Which outcomes each public operation may produce for well-shaped input
FAILURE_POLICIES = {
    "format_address": "DEFAULT",        # unknown segment -> default code
    "convert_hfn_to_mfa": "REJECT",     # unknown segment -> input unchanged
    "convert_mfa_to_hfn": "REJECT",
    "normalize_for_display": "PARTIAL", # only resolvable segments rewritten
}
