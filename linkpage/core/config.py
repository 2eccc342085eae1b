import os
from dotenv import load_dotenv

load_dotenv(override=True)


def _env_bool(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


IS_PRODUCTION = (
    os.getenv('ENVIRONMENT') == 'production' or
    os.getenv('FLASK_ENV') == 'production' or
    os.getenv('NODE_ENV') == 'production' or
    os.getenv('PRODUCTION') == '1'
)


class Config:
    """
    Base configuration for linkpage.
    Every value can be overridden through environment variables or a .env file.
    """
    # Flask settings
    SECRET_KEY = (
        os.getenv('SESSION_SECRET') or
        os.getenv('FLASK_SECRET_KEY') or
        'dev-secret-key-change-in-production'
    )
    IS_PRODUCTION = IS_PRODUCTION
    PORT = int(os.getenv('PORT', '3000'))

    # Session cookie
    SESSION_LIFETIME_HOURS = int(os.getenv('SESSION_LIFETIME_HOURS', '24'))
    SESSION_COOKIE_SECURE = IS_PRODUCTION
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    # Honour X-Forwarded-For when running behind a reverse proxy
    TRUST_PROXY = _env_bool('TRUST_PROXY')

    # JSON documents (links.json, theme.json, profile.json, auth.json, config.json)
    DATA_DIR = os.getenv('DATA_DIR', os.path.join(os.getcwd(), 'data'))

    # Landing page, login page and admin panel
    STATIC_FOLDER = os.getenv('STATIC_FOLDER', os.path.join(os.getcwd(), 'public'))

    # Login rate limiting
    LOGIN_MAX_ATTEMPTS = int(os.getenv('LOGIN_MAX_ATTEMPTS', '5'))
    LOGIN_LOCKOUT_SECONDS = int(os.getenv('LOGIN_LOCKOUT_SECONDS', str(15 * 60)))

    # Noun Project icon search
    NOUN_PROJECT_API_URL = os.getenv('NOUN_PROJECT_API_URL', 'https://api.thenounproject.com')
    ICON_SEARCH_TIMEOUT = float(os.getenv('ICON_SEARCH_TIMEOUT', '10'))
    ICON_SEARCH_LIMIT = int(os.getenv('ICON_SEARCH_LIMIT', '20'))

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    @classmethod
    def as_dict(cls):
        """Upper-case settings, ready for app.config.update()"""
        return {key: getattr(cls, key) for key in dir(cls) if key.isupper()}


def get_config_value(key, default=None):
    """Get configuration value: Flask app config first, then Config, then env var"""
    try:
        from flask import current_app
        val = current_app.config.get(key)
        if val is not None:
            return val
    except RuntimeError:
        pass
    val = getattr(Config, key, None)
    if val is not None:
        return val
    return os.getenv(key, default)
