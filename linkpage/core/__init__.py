"""
linkpage Core
=============

Shared services for linkpage modules: configuration, document storage,
logging, error taxonomy and validators.
"""

from .config import Config, get_config_value
from .storage import DocumentStore, StorageError
from .logging_service import LoggingService, logger

__all__ = ['Config', 'get_config_value', 'DocumentStore', 'StorageError', 'LoggingService', 'logger']
