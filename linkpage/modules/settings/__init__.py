"""
Settings Module
===============

Theme, profile and icon search configuration.

Public:
- GET /api/theme, GET /api/profile

Admin (session required):
- GET/PUT /api/admin/theme
- GET/PUT /api/admin/profile
- GET/PUT /api/admin/config  (API credentials, masked on the way out)
"""

from flask import Blueprint

settings_bp = Blueprint('settings', __name__, url_prefix='/api')

settings_admin_bp = Blueprint('settings_admin', __name__, url_prefix='/api/admin')

from . import routes

__all__ = ['settings_bp', 'settings_admin_bp']
