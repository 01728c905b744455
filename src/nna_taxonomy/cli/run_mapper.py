"""Mapper construction for command-line use.

Loads the user config file, resolves configuration and configures logging.
Argument parsing lives in ``nna_taxonomy.cli.main``; this module holds the
logic so it can be reused and tested without argparse.
"""

import logging
import importlib.util
from pathlib import Path
from typing import Any, Dict, Optional

from nna_taxonomy.mapping import TaxonomyMapper
from nna_taxonomy.schemas import resolve_config, ParamConfig, UserConfig, CLIConfig


logger = logging.getLogger(__name__)


def load_user_config_dict(config_path: str) -> dict:
    """Load user config dict from Python file.
    
    Returns the raw dict before Pydantic validation.
    
    Parameters
    ----------
    config_path : str
        Path to user config Python file containing CONFIG dict.
        
    Returns
    -------
    dict
        Raw user configuration dictionary.
        
    Raises
    ------
    FileNotFoundError
        If config file does not exist.
    ValueError
        If no CONFIG dict found in file.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")
    
    spec = importlib.util.spec_from_file_location("nna_user_config", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    
    for name in dir(module):
        if name.startswith('CONFIG'):
            obj = getattr(module, name)
            if isinstance(obj, dict):
                return obj
    
    raise ValueError(f"No CONFIG dict found in {path}")


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Install console (and optional file) handlers on the root logger.

    Existing root handlers are removed first, so repeated calls do not
    duplicate output. The library itself never calls this.
    """
    log_level = getattr(logging, str(level).upper(), logging.INFO)

    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Clear existing handlers and add new ones
    root = logging.getLogger()
    root.setLevel(log_level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)


def load_mapper(
    user_config_path: Optional[str] = None,
    cli_args: Optional[Dict[str, Any]] = None,
    verbose: bool = False,
) -> TaxonomyMapper:
    """Resolve configuration (Param < User < CLI), set up logging, build a mapper.

    Parameters
    ----------
    user_config_path : str, optional
        Python file with a CONFIG dict. None uses defaults only.
    cli_args : dict, optional
        CLIConfig fields (taxonomy_path, log_level, no_cache); None values
        are dropped.
    verbose : bool, optional
        Force DEBUG logging.

    Raises
    ------
    FileNotFoundError
        If the config file or taxonomy file does not exist.
    ValueError
        If the config file has no CONFIG dict or a config value is invalid.
    ContractViolation
        If the taxonomy has code collisions under the fail_fast policy.
    """
    param_cfg = ParamConfig()

    user_cfg = UserConfig()
    if user_config_path:
        user_cfg = UserConfig.model_validate(load_user_config_dict(user_config_path))

    cli_args = dict(cli_args or {})
    if verbose:
        cli_args["log_level"] = "DEBUG"
    cli_dict = {k: v for k, v in cli_args.items() if v is not None}
    cli_cfg = CLIConfig.model_validate(cli_dict) if cli_dict else CLIConfig()

    config = resolve_config(param_cfg, user_cfg, cli_cfg)
    configure_logging(config.logging.level)
    logger.debug("Resolved configuration: %s", config.model_dump())

    return TaxonomyMapper(config)
