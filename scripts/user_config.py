"""NNA taxonomy mapper user configuration.

Pass this file to any ``nna-taxonomy`` subcommand to override the packaged
defaults. Only list what you want to change; everything else comes from
``nna_taxonomy.schemas.param``.

Usage:
    nna-taxonomy validate --config scripts/user_config.py
    nna-taxonomy convert S.POP.HPM.001 --config scripts/user_config.py
"""

CONFIG = {
    # ========================================================================
    # TAXONOMY SOURCE
    # ========================================================================
    "TAXONOMY_PATH": None,          # Path to a taxonomy JSON; None = packaged table
    "COLLISION_POLICY": "fail_fast", # "fail_fast" or "warn_only"

    # ========================================================================
    # OVERRIDES (merged over the packaged registry)
    # ========================================================================
    # "LAYER.CATEGORY.SUBCATEGORY" or "LAYER.CATEGORY" -> numeric code
    "OVERRIDES": {
        "S.POP.HPM": "007",
    },

    # ========================================================================
    # RESOLVER / RUNTIME
    # ========================================================================
    "DEFAULT_CODE": "001",          # Returned by live-preview lookups that miss
    "CACHE_ENABLED": True,
    "LOG_LEVEL": "INFO",            # DEBUG, INFO, WARNING, ERROR, CRITICAL
}
