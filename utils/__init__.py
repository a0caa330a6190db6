"""
Utility functions for the project.

This module provides configuration loading, command-line argument
processing, seeding and report logging helpers.
"""
# Configuration utilities
from .arg_tools import load_config, merge_cli, parse_profile_args, ProfileArgumentError
from .config import load_env_config
from .seeding import set_global_seeds

# Logging utilities
from .logger import Logger

__all__ = [
    # Configuration utilities
    'load_config',
    'merge_cli',
    'parse_profile_args',
    'ProfileArgumentError',
    'load_env_config',
    'set_global_seeds',

    # Logging utilities
    'Logger'
]
