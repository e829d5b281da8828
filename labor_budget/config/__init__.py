"""
Configuration module for the labor budget tracker.
"""
from .logging_config import LoggingConfig, configure_logging, reset_logging
from .settings import (
    LaborBudgetConfig,
    get_config,
    load_config,
    reload_config
)

__all__ = [
    'LaborBudgetConfig',
    'LoggingConfig',
    'configure_logging',
    'get_config',
    'load_config',
    'reload_config',
    'reset_logging'
]
