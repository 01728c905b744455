"""Root-level pytest fixtures for the NNA taxonomy test suite.

Provides shared configuration fixtures following the Pydantic-based
configuration layers. Tests should build configs through these fixtures
instead of raw dicts.
"""

import json

import pytest

from nna_taxonomy.mapping import TaxonomyMapper
from nna_taxonomy.schemas import ParamConfig, UserConfig, resolve_config


# =============================================================================
# Configuration Fixtures (Pydantic-based)
# =============================================================================

@pytest.fixture
def param_config():
    """Expert configuration with all defaults."""
    return ParamConfig()


@pytest.fixture
def internal_config(param_config):
    """Fully validated runtime configuration (no overrides)."""
    return resolve_config(param_config, None, None)


@pytest.fixture
def make_config(param_config):
    """Factory fixture for creating custom test configs.
    
    Returns a callable that accepts UserConfig-compatible kwargs.
    
    Examples
    --------
    >>> def test_custom_default(make_config):
    ...     config = make_config(DEFAULT_CODE="999")
    ...     assert config.resolver.default_code == "999"
    """
    def _make(**user_overrides):
        """Create InternalConfig with user overrides."""
        if user_overrides:
            user = UserConfig(**user_overrides)
            return resolve_config(param_config, user, None)
        else:
            return resolve_config(param_config, None, None)
    
    return _make


# =============================================================================
# Mapper Fixtures
# =============================================================================

@pytest.fixture(scope="session")
def mapper():
    """Mapper over the packaged taxonomy with default overrides.

    Session scoped: the mapper is read-only apart from its cache.
    """
    return TaxonomyMapper(resolve_config())


# =============================================================================
# Taxonomy Document Fixtures
# =============================================================================

SMALL_TAXONOMY = {
    "version": "test",
    "layers": [
        {
            "code": "S",
            "name": "Stars",
            "categories": [
                {
                    "code": "POP",
                    "name": "Pop",
                    "numericCode": "001",
                    "subcategories": [
                        {"code": "BAS", "name": "Base", "numericCode": "001"},
                        {"code": "DIV", "name": "Pop_Diva", "numericCode": "002"},
                        {"code": "HPM", "name": "Pop_Hipster_Male", "numericCode": "003"},
                    ],
                },
                {
                    "code": "RCK",
                    "name": "Rock",
                    "numericCode": "002",
                    "subcategories": [
                        {"code": "BAS", "name": "Base", "numericCode": "001"},
                    ],
                },
            ],
        },
        {
            "code": "W",
            "name": "Worlds",
            "categories": [
                {
                    "code": "STG",
                    "name": "Stage",
                    "numericCode": "002",
                    "subcategories": [
                        {"code": "BAS", "name": "Base", "numericCode": "001"},
                        {"code": "FES", "name": "Festival", "numericCode": "003"},
                    ],
                },
            ],
        },
    ],
}


@pytest.fixture
def small_taxonomy_dict():
    """Deep copy of a small, clean taxonomy document."""
    return json.loads(json.dumps(SMALL_TAXONOMY))


@pytest.fixture
def write_taxonomy(tmp_path):
    """Factory writing a taxonomy dict to a temp JSON file; returns its path."""
    def _write(document, name="taxonomy.json"):
        path = tmp_path / name
        path.write_text(json.dumps(document), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def small_taxonomy_doc(write_taxonomy, small_taxonomy_dict):
    """Path to a temp file holding the small taxonomy document."""
    return write_taxonomy(small_taxonomy_dict)
