"""
Settings Routes
===============

Theme, profile and icon configuration. PUT bodies are partial: only the
fields present are validated and replaced, the rest of the document is kept.
"""

from flask import jsonify, request, session

from . import settings_admin_bp, settings_bp
from .helpers import CONFIG_FIELDS, looks_masked, masked_config, read_icon_config
from ..auth.utils import admin_required
from ...core.errors import InvalidInput
from ...core.logging_service import LoggingService
from ...core.storage import get_store
from ...core.validators import MAX_BIO_LENGTH, is_optional_url, is_valid_bio, is_valid_hex_color

THEME_COLORS = {
    'backgroundColor': '#ffffff',
    'textColor': '#000000',
    'buttonColor': '#007bff',
    'buttonTextColor': '#ffffff',
}


def _json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidInput('Request body must be a JSON object')
    return data


# ===== Public Routes =====

@settings_bp.route('/theme', methods=['GET'])
def get_public_theme():
    return jsonify(get_store().read('theme'))


@settings_bp.route('/profile', methods=['GET'])
def get_public_profile():
    return jsonify(get_store().read('profile'))


# ===== Theme =====

@settings_admin_bp.route('/theme', methods=['GET'])
@admin_required
def get_theme():
    return jsonify(get_store().read('theme'))


@settings_admin_bp.route('/theme', methods=['PUT'])
@admin_required
def update_theme():
    """Update theme colors and background image"""
    data = _json_body()

    changes = {}
    for key, example in THEME_COLORS.items():
        if key in data:
            if not is_valid_hex_color(data[key]):
                raise InvalidInput(
                    f'Invalid {key} format. Must be a hex color (e.g., {example})', 'INVALID_COLOR'
                )
            changes[key] = data[key]

    if 'backgroundImageUrl' in data:
        value = data['backgroundImageUrl']
        if not is_optional_url(value):
            raise InvalidInput('Invalid backgroundImageUrl format. Must be a valid URL', 'INVALID_URL')
        changes['backgroundImageUrl'] = value.strip()

    store = get_store()
    with store.lock('theme'):
        theme = store.read('theme')
        theme.update(changes)
        store.write('theme', theme)

    LoggingService.log_user_action('settings', 'theme updated', session.get('username'), {
        'fields': sorted(changes),
    })
    return jsonify({
        'success': True,
        'message': 'Theme updated successfully',
        'theme': theme
    })


# ===== Profile =====

@settings_admin_bp.route('/profile', methods=['GET'])
@admin_required
def get_profile():
    return jsonify(get_store().read('profile'))


@settings_admin_bp.route('/profile', methods=['PUT'])
@admin_required
def update_profile():
    """Update profile photo URL and bio"""
    data = _json_body()

    changes = {}
    if 'photoUrl' in data:
        if not is_optional_url(data['photoUrl']):
            raise InvalidInput('Invalid photoUrl format. Must be a valid URL', 'INVALID_URL')
        changes['photoUrl'] = data['photoUrl'].strip()

    if 'bio' in data:
        if not is_valid_bio(data['bio']):
            raise InvalidInput(f'Bio must be {MAX_BIO_LENGTH} characters or less', 'INVALID_BIO')
        changes['bio'] = data['bio'].strip()

    store = get_store()
    with store.lock('profile'):
        profile = store.read('profile')
        profile.update(changes)
        store.write('profile', profile)

    LoggingService.log_user_action('settings', 'profile updated', session.get('username'), {
        'fields': sorted(changes),
    })
    return jsonify({
        'success': True,
        'message': 'Profile updated successfully',
        'profile': profile
    })


# ===== Icon search configuration =====

@settings_admin_bp.route('/config', methods=['GET'])
@admin_required
def get_config():
    """API credentials, masked"""
    return jsonify(masked_config(read_icon_config()))


@settings_admin_bp.route('/config', methods=['PUT'])
@admin_required
def update_config():
    """Save Noun Project credentials; masked values sent back unchanged are ignored"""
    data = _json_body()

    changes = {}
    for key in CONFIG_FIELDS:
        if key not in data:
            continue
        value = data[key]
        if value is None:
            value = ''
        if not isinstance(value, str):
            raise InvalidInput(f'{key} must be a string')
        value = value.strip()
        if looks_masked(value):
            continue
        changes[key] = value

    store = get_store()
    with store.lock('config'):
        config = read_icon_config()
        config.update(changes)
        store.write('config', config)

    LoggingService.log_user_action('settings', 'icon search config updated', session.get('username'), {
        'fields': sorted(changes),
    })
    return jsonify({
        'success': True,
        'message': 'Configuration updated successfully',
        'config': masked_config(config)
    })
