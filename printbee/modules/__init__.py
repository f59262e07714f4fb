"""
Print Bee Modules
=================

Flask blueprint modules plus the store client they share.
"""

__all__ = ['store', 'orders', 'dashboard', 'analytics', 'ops', 'portal']
