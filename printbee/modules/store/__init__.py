"""
Store Module
============

Client for the external spreadsheet-backed store (the system of record).
"""

from .service import ScriptStoreService, StoreError, store_service

__all__ = ['ScriptStoreService', 'StoreError', 'store_service']
