"""
Links Module
============

Public link list and admin CRUD/reorder for the link page.
Two blueprints: public API and admin API.
"""

from flask import Blueprint

# Admin API for managing links
links_admin_bp = Blueprint('links_admin', __name__, url_prefix='/api/admin/links')

# Public link list
links_bp = Blueprint('links', __name__, url_prefix='/api/links')

from . import routes

__all__ = ['links_admin_bp', 'links_bp']
