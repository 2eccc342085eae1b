"""
linkpage Modules
================

Flask blueprint modules: auth, links, settings, icons.
"""

__all__ = ['auth', 'links', 'settings', 'icons']
