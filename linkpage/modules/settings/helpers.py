"""
Settings Helpers
================

Convenient functions for reading the icon search configuration and for
presenting secrets to the admin panel without revealing them.
"""

from ...core.storage import DocumentNotFound, get_store

CONFIG_FIELDS = ('nounProjectApiKey', 'nounProjectApiSecret')


def mask_secret(value):
    """Show only the last 4 chars of a secret"""
    if not value:
        return ''
    if len(value) <= 4:
        return '****'
    return '*' * (len(value) - 4) + value[-4:]


def looks_masked(value):
    """Masked values echoed back by the admin form must not overwrite the secret"""
    return bool(value) and value.startswith('*')


def read_icon_config():
    """Config document, or empty credentials when config.json does not exist yet"""
    try:
        config = get_store().read('config')
    except DocumentNotFound:
        config = {}
    return {key: (config.get(key) or '') for key in CONFIG_FIELDS}


def is_icon_search_enabled(config):
    return bool(config.get('nounProjectApiKey')) and bool(config.get('nounProjectApiSecret'))


def masked_config(config):
    return {
        'nounProjectApiKey': mask_secret(config.get('nounProjectApiKey')),
        'nounProjectApiSecret': mask_secret(config.get('nounProjectApiSecret')),
        'iconSearchEnabled': is_icon_search_enabled(config),
    }
