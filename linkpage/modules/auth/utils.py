from functools import wraps

import bcrypt
from flask import session

from ...core.errors import Unauthorized


def hash_password(password, rounds=12):
    """bcrypt hash of password, as a str for storage in auth.json"""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')


def verify_password(password, password_hash):
    """Check password against a stored bcrypt hash (False for malformed hashes)"""
    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
    except (ValueError, TypeError):
        return False


def is_authenticated():
    return bool(session.get('isAuthenticated'))


def admin_required(f):
    """Decorator to require an authenticated admin session"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not is_authenticated():
            raise Unauthorized()
        return f(*args, **kwargs)
    return decorated_function
