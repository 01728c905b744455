"""CLIConfig: Command-line operational overrides.

Minimal configuration for settings that commonly change between runs:
taxonomy file, verbosity, caching.

This schema handles command-line arguments parsed by argparse.
"""

from typing import Literal, Optional
from nna_taxonomy.schemas.base import NNABaseModel


class CLIConfig(NNABaseModel):
    """Command-line configuration overrides.
    
    Highest priority in config resolution.
    
    Usage
    -----
        cli_cfg = CLIConfig(taxonomy_path="taxonomy.json", log_level="DEBUG")
        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """
    
    taxonomy_path: Optional[str] = None
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = None
    no_cache: bool = False
    
    def to_internal_overrides(self) -> dict:
        """Convert CLI config to internal config structure.
        
        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides = {}
        
        if self.taxonomy_path is not None:
            overrides["taxonomy"] = {"source": self.taxonomy_path}
        
        if self.log_level is not None:
            overrides["logging"] = {"level": self.log_level}
        
        if self.no_cache:
            overrides["cache"] = {"enabled": False}
        
        return overrides
