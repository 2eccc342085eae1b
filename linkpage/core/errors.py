"""
Error Taxonomy
==============

Client-facing errors carry a human message, a machine code and an HTTP status.
Every handler below answers with the same body shape:

    {"error": "<message>", "code": "<CODE>"}

Storage and upstream failures are logged with full detail but only a generic
message reaches the client.
"""

from flask import jsonify, request
from werkzeug.exceptions import HTTPException

from .logging_service import LoggingService
from .storage import DocumentCorrupt, DocumentNotFound, StorageError


class ApiError(Exception):
    """Base class for errors that map straight onto a JSON response"""
    status = 500
    code = 'SERVER_ERROR'
    message = 'An unexpected error occurred'

    def __init__(self, message=None, code=None, status=None):
        super().__init__(message or self.message)
        if message:
            self.message = message
        if code:
            self.code = code
        if status:
            self.status = status

    def to_dict(self):
        return {'error': self.message, 'code': self.code}


class InvalidInput(ApiError):
    status = 400
    code = 'INVALID_INPUT'
    message = 'Invalid input'


class UnknownReference(InvalidInput):
    """A request named an entity that does not exist (e.g. reorder with a stale id)"""
    code = 'INVALID_LINK_ID'
    message = 'Referenced item not found'


class NotConfigured(ApiError):
    status = 400
    code = 'ICON_SEARCH_NOT_CONFIGURED'
    message = 'Icon search is not configured. Add Noun Project API credentials first.'


class Unauthorized(ApiError):
    status = 401
    code = 'UNAUTHORIZED'
    message = 'Authentication required'


class NotFound(ApiError):
    status = 404
    code = 'NOT_FOUND'
    message = 'Not found'


class RateLimited(ApiError):
    status = 429
    code = 'RATE_LIMITED'
    message = 'Too many login attempts. Please try again later.'


class AuthNotConfigured(ApiError):
    status = 500
    code = 'AUTH_NOT_CONFIGURED'
    message = 'Authentication not configured'


class UpstreamError(ApiError):
    """The icon service failed; status/body are kept for the server log only"""
    status = 502
    code = 'UPSTREAM_ERROR'
    message = 'Icon search service is unavailable. Please try again later.'

    def __init__(self, message=None, upstream_status=None, upstream_body=None):
        super().__init__(message)
        self.upstream_status = upstream_status
        self.upstream_body = upstream_body


def _storage_error_code(error):
    if isinstance(error, DocumentNotFound):
        return 'FILE_NOT_FOUND', f'{error.kind.capitalize()} data file not found'
    if isinstance(error, DocumentCorrupt):
        return 'INVALID_JSON', f'{error.kind.capitalize()} data file is corrupted'
    return 'WRITE_ERROR', f'Failed to save {error.kind} data'


def register_error_handlers(app):
    """Install JSON error handlers on the app"""

    @app.errorhandler(ApiError)
    def handle_api_error(error):
        if isinstance(error, UpstreamError):
            LoggingService.error('icons', 'Upstream icon service failure', {
                'upstream_status': error.upstream_status,
                'upstream_body': error.upstream_body,
            })
        return jsonify(error.to_dict()), error.status

    @app.errorhandler(StorageError)
    def handle_storage_error(error):
        LoggingService.error('storage', str(error), {
            'kind': error.kind,
            'path': error.path,
        })
        code, message = _storage_error_code(error)
        return jsonify({'error': message, 'code': code}), 500

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        if not request.path.startswith('/api/'):
            return error
        code = {
            404: 'NOT_FOUND',
            405: 'METHOD_NOT_ALLOWED',
            413: 'PAYLOAD_TOO_LARGE',
        }.get(error.code, 'HTTP_ERROR')
        return jsonify({'error': error.description, 'code': code}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        LoggingService.log_error_with_traceback('server', error, {'path': request.path})
        return jsonify({'error': 'An unexpected error occurred', 'code': 'SERVER_ERROR'}), 500
