"""
linkpage Auth Module

Admin authentication for the link page:
- Session login/logout for the single admin account
- Per-address login rate limiting
- admin_required guard for the admin API
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__, url_prefix='/api')

from . import routes
from .rate_limiter import LoginRateLimiter
from .utils import admin_required, hash_password, verify_password

__all__ = ['auth_bp', 'LoginRateLimiter', 'admin_required', 'hash_password', 'verify_password']
