"""
Centralized logging service for linkpage.
Tags every entry with a source component and, inside a request, with the
client address and path.
"""

import json
import logging
import sys
import traceback

from flask import request, has_request_context

_logger = logging.getLogger('linkpage')


def configure_logging(level='INFO'):
    """Attach a stream handler to the linkpage logger (idempotent)"""
    if not any(getattr(h, '_linkpage', False) for h in _logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(
            '%(asctime)s [%(levelname)s] %(message)s'
        ))
        handler._linkpage = True
        _logger.addHandler(handler)
    _logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    return _logger


class LoggingService:
    """Centralized logging service for application-wide logging"""

    @staticmethod
    def _get_request_context():
        """Extract request context information"""
        if not has_request_context():
            return None, None

        ip_address = request.remote_addr
        return ip_address, request.path

    @staticmethod
    def log(level, source, message, details=None, user_id=None):
        """
        Log a message

        Args:
            level (str): Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            source (str): Source component (links, auth, storage, icons, ...)
            message (str): Main log message
            details (dict/str): Additional details (JSON-encoded if dict)
            user_id (str): Optional user identifier
        """
        ip_address, request_path = LoggingService._get_request_context()

        parts = [f"[{source}] {message}"]
        if request_path:
            parts.append(f"path={request_path}")
        if ip_address:
            parts.append(f"ip={ip_address}")
        if user_id:
            parts.append(f"user={user_id}")
        if details:
            if isinstance(details, dict):
                details = json.dumps(details, default=str, sort_keys=True)
            parts.append(f"details={details}")

        _logger.log(getattr(logging, level.upper(), logging.INFO), ' '.join(parts))

    @staticmethod
    def debug(source, message, details=None, user_id=None):
        LoggingService.log('DEBUG', source, message, details, user_id)

    @staticmethod
    def info(source, message, details=None, user_id=None):
        LoggingService.log('INFO', source, message, details, user_id)

    @staticmethod
    def warning(source, message, details=None, user_id=None):
        LoggingService.log('WARNING', source, message, details, user_id)

    @staticmethod
    def error(source, message, details=None, user_id=None):
        LoggingService.log('ERROR', source, message, details, user_id)

    @staticmethod
    def critical(source, message, details=None, user_id=None):
        LoggingService.log('CRITICAL', source, message, details, user_id)

    @staticmethod
    def log_user_action(source, action, user_id=None, details=None):
        """Log admin actions (login, link created, theme saved, ...)"""
        LoggingService.info(source, f"User action: {action}", details, user_id)

    @staticmethod
    def log_error_with_traceback(source, error, details=None):
        """Log error with full traceback"""
        error_details = {
            'error_type': type(error).__name__,
            'error_message': str(error),
            'traceback': traceback.format_exc()
        }
        if details:
            error_details['additional_details'] = details

        LoggingService.error(source, f"Exception occurred: {type(error).__name__}", error_details)

    @staticmethod
    def log_security_event(message, details=None):
        """Log security-related events (failed logins, lockouts)"""
        LoggingService.warning('security', message, details)


# Convenience instance for easy importing
logger = LoggingService()
