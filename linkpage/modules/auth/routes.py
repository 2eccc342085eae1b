"""
Auth Routes
===========

POST /api/login        - start an admin session (rate limited per address)
POST /api/logout       - end the session
GET  /api/auth/status  - whether the current session is authenticated
"""

from flask import jsonify, request, session

from . import auth_bp
from .rate_limiter import LOCKED, get_rate_limiter
from .utils import is_authenticated, verify_password
from ...core.errors import AuthNotConfigured, InvalidInput, RateLimited
from ...core.logging_service import LoggingService
from ...core.storage import get_store


def _invalid_credentials():
    return jsonify({
        'error': 'Invalid username or password',
        'code': 'INVALID_CREDENTIALS'
    }), 401


@auth_bp.route('/login', methods=['POST'])
def login():
    """Authenticate admin with username and password"""
    limiter = get_rate_limiter()
    client_ip = request.remote_addr or 'unknown'

    limiter.sweep()

    # Lock check and count are one step, taken before credentials are read
    attempts = limiter.begin_attempt(client_ip)
    if attempts == LOCKED:
        LoggingService.log_security_event('Login rejected: address locked out', {
            'retry_after': limiter.retry_after(client_ip),
        })
        raise RateLimited()

    data = request.get_json(silent=True)
    username = data.get('username') if isinstance(data, dict) else None
    password = data.get('password') if isinstance(data, dict) else None

    if not isinstance(username, str) or not isinstance(password, str) or not username or not password:
        raise InvalidInput('Username and password are required')

    auth_data = get_store().read('auth')
    stored_username = auth_data.get('username')
    stored_hash = auth_data.get('passwordHash')
    if not stored_username or not stored_hash:
        LoggingService.error('auth', 'auth.json has no username or passwordHash')
        raise AuthNotConfigured()

    if username != stored_username or not verify_password(password, stored_hash):
        LoggingService.log_security_event('Failed admin login', {
            'attempts': attempts,
            'max_attempts': limiter.max_attempts,
        })
        return _invalid_credentials()

    limiter.reset(client_ip)
    session.clear()
    session.permanent = True
    session['isAuthenticated'] = True
    session['username'] = username
    LoggingService.log_user_action('auth', 'login', user_id=username)

    return jsonify({
        'success': True,
        'message': 'Login successful'
    })


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """Destroy session and log out admin"""
    if not session:
        return jsonify({'success': True, 'message': 'No active session'})

    username = session.get('username')
    session.clear()
    LoggingService.log_user_action('auth', 'logout', user_id=username)
    return jsonify({
        'success': True,
        'message': 'Logout successful'
    })


@auth_bp.route('/auth/status', methods=['GET'])
def auth_status():
    return jsonify({'isAuthenticated': is_authenticated()})
