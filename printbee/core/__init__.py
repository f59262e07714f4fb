"""
Print Bee Core
==============

Configuration, log storage and the logging service shared by all modules.
"""

from .config import Config, get_config_value
from .database import Database
from .logging_service import LoggingService, logger

__all__ = ['Config', 'get_config_value', 'Database', 'LoggingService', 'logger']
