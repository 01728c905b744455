"""Command-line tools for the NNA taxonomy mapper.

The mapper is a library; this package is a thin developer wrapper around it.
"""

from nna_taxonomy.cli.run_mapper import configure_logging, load_mapper, load_user_config_dict
from nna_taxonomy.cli.main import build_parser, main

__all__ = ['configure_logging', 'load_mapper', 'load_user_config_dict', 'build_parser', 'main']
