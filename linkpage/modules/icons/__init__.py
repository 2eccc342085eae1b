"""
Icons Module
============

Admin-only proxy to the Noun Project icon search, using the credentials saved
through /api/admin/config.

Usage:
    from linkpage.modules.icons import icons_admin_bp

    app.register_blueprint(icons_admin_bp)  # Registers at /api/admin/icons
"""

from flask import Blueprint

icons_admin_bp = Blueprint('icons_admin', __name__, url_prefix='/api/admin/icons')

from . import routes
from .service import NounProjectService

__all__ = ['icons_admin_bp', 'NounProjectService']
