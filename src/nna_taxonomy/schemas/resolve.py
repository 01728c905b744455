"""Configuration resolution and merging logic.

This module provides the single entrypoint for configuration resolution:
resolve_config(). It merges ParamConfig, UserConfig, and CLIConfig in
the correct precedence order and returns a validated InternalConfig.

Precedence (highest to lowest):
1. CLIConfig (command-line overrides)
2. UserConfig (user file)
3. ParamConfig (expert defaults)
"""

from typing import Union, Optional
from nna_taxonomy.schemas.param import ParamConfig
from nna_taxonomy.schemas.user import UserConfig
from nna_taxonomy.schemas.cli import CLIConfig
from nna_taxonomy.schemas.internal import InternalConfig


def deep_merge(base: dict, *overrides: dict) -> dict:
    """Deep merge multiple dictionaries.
    
    Later dictionaries override earlier ones. Nested dictionaries are
    merged recursively; other values are replaced.
    
    Examples
    --------
    >>> base = {"overrides": {"S.POP.HPM": "007"}, "cache": {"enabled": True}}
    >>> deep_merge(base, {"overrides": {"G.POP.TSW": "012"}})
    {'overrides': {'S.POP.HPM': '007', 'G.POP.TSW': '012'}, 'cache': {'enabled': True}}
    """
    result = base.copy()
    
    for override in overrides:
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = deep_merge(result[key], value)
            else:
                result[key] = value
    
    return result


def resolve_config(
    param_cfg: Optional[Union[dict, ParamConfig]] = None,
    user_cfg: Optional[Union[dict, UserConfig]] = None,
    cli_cfg: Optional[Union[dict, CLIConfig]] = None,
) -> InternalConfig:
    """Resolve final runtime configuration from param, user, and CLI configs.
    
    Parameters
    ----------
    param_cfg : dict or ParamConfig, optional
        Expert configuration. None uses ``ParamConfig()`` defaults.
    user_cfg : dict or UserConfig, optional
        User configuration with overrides.
    cli_cfg : dict or CLIConfig, optional
        Command-line overrides.
    
    Returns
    -------
    InternalConfig
        Fully validated, immutable runtime configuration
    
    Raises
    ------
    ValidationError
        If any config fails Pydantic validation
    
    Examples
    --------
    >>> config = resolve_config(ParamConfig(), UserConfig(LOG_LEVEL="debug"))
    >>> config.logging.level
    'DEBUG'
    >>> config.overrides["S.POP.HPM"]
    '007'
    """
    if param_cfg is None:
        param = ParamConfig()
    elif not isinstance(param_cfg, ParamConfig):
        param = ParamConfig.model_validate(param_cfg)
    else:
        param = param_cfg
    
    if user_cfg is None or (isinstance(user_cfg, dict) and not user_cfg):
        user = UserConfig()
    elif not isinstance(user_cfg, UserConfig):
        user = UserConfig.model_validate(user_cfg)
    else:
        user = user_cfg
    
    if cli_cfg is None or (isinstance(cli_cfg, dict) and not cli_cfg):
        cli = CLIConfig()
    elif not isinstance(cli_cfg, CLIConfig):
        cli = CLIConfig.model_validate(cli_cfg)
    else:
        cli = cli_cfg
    
    # mode="json" turns FailurePolicy members into plain strings
    param_dict = param.model_dump(mode="json")
    user_overrides = user.to_internal_overrides()
    cli_overrides = cli.to_internal_overrides()
    
    merged = deep_merge(param_dict, user_overrides, cli_overrides)
    
    return InternalConfig.model_validate(merged)
