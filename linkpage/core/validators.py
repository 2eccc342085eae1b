"""
Validators
==========

Pure predicates shared by every admin write path. The admin panel mirrors
them in JavaScript for quick feedback; these are the authoritative checks.
"""

import re
from urllib.parse import urlparse

HEX_COLOR_RE = re.compile(r'#[0-9A-Fa-f]{6}')
MAX_BIO_LENGTH = 500
VISUAL_TYPES = ('none', 'image', 'icon')


def is_valid_url(value):
    """Absolute http(s) URL with a host and no embedded whitespace"""
    if not isinstance(value, str) or not value.strip():
        return False
    value = value.strip()
    if any(ch.isspace() for ch in value):
        return False
    try:
        parsed = urlparse(value)
        parsed.port  # ValueError for a malformed port
    except ValueError:
        return False
    return parsed.scheme in ('http', 'https') and bool(parsed.hostname)


def is_valid_hex_color(value):
    """'#' followed by exactly six hex digits"""
    return isinstance(value, str) and HEX_COLOR_RE.fullmatch(value) is not None


def is_valid_bio(value):
    return isinstance(value, str) and len(value.strip()) <= MAX_BIO_LENGTH


def is_valid_visual_type(value):
    return value in VISUAL_TYPES


def is_optional_url(value):
    """Empty string clears the field, anything else must be a valid URL"""
    return isinstance(value, str) and (value.strip() == '' or is_valid_url(value))
