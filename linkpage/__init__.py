"""
linkpage - A personal link page for Flask
=========================================

A public landing page listing your links, profile and theme, plus a
password-protected admin API to manage them. State lives in plain JSON files.

Usage:
    from flask import Flask
    from linkpage import LinkPage

    app = Flask(__name__)
    LinkPage(app)

or simply:

    from linkpage import create_app
    app = create_app()
"""

from datetime import timedelta

from flask import Flask, send_from_directory
from werkzeug.middleware.proxy_fix import ProxyFix

from .core.config import Config
from .core.errors import register_error_handlers
from .core.logging_service import LoggingService, configure_logging
from .core.storage import DocumentStore
from .modules.auth import auth_bp, LoginRateLimiter
from .modules.icons import icons_admin_bp
from .modules.links import links_admin_bp, links_bp
from .modules.links.migrations import migrate_links
from .modules.settings import settings_admin_bp, settings_bp

__version__ = '0.1.0'

BLUEPRINTS = {
    'auth': [auth_bp],
    'links': [links_bp, links_admin_bp],
    'settings': [settings_bp, settings_admin_bp],
    'icons': [icons_admin_bp],
}


class LinkPage:
    """Flask extension wiring storage, rate limiting and the API blueprints"""

    def __init__(self, app=None):
        self.store = None
        self.rate_limiter = None
        self._registered = []
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        for key, value in Config.as_dict().items():
            app.config.setdefault(key, value)
        app.config.setdefault(
            'PERMANENT_SESSION_LIFETIME',
            timedelta(hours=app.config['SESSION_LIFETIME_HOURS'])
        )

        configure_logging(app.config['LOG_LEVEL'])

        self.store = DocumentStore(app.config['DATA_DIR'])
        self.rate_limiter = LoginRateLimiter(
            max_attempts=app.config['LOGIN_MAX_ATTEMPTS'],
            window_seconds=app.config['LOGIN_LOCKOUT_SECONDS'],
        )
        app.extensions['linkpage'] = self

        if app.config['TRUST_PROXY']:
            app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1)

        for name, blueprints in BLUEPRINTS.items():
            for blueprint in blueprints:
                app.register_blueprint(blueprint)
            self._registered.append(name)

        register_error_handlers(app)

        from .cli import register_commands
        register_commands(app)

        migrate_links(self.store)
        LoggingService.info('system', 'linkpage initialised', {
            'data_dir': app.config['DATA_DIR'],
            'modules': self._registered,
        })

    def get_registered_modules(self):
        return list(self._registered)


def create_app(overrides=None):
    """Build a ready-to-run Flask app; overrides are applied on top of Config"""
    config = Config.as_dict()
    config.update(overrides or {})

    app = Flask(
        __name__,
        static_folder=config['STATIC_FOLDER'],
        static_url_path='',
    )
    app.config.update(config)

    LinkPage(app)

    @app.route('/')
    def index():
        """Landing page"""
        return send_from_directory(app.static_folder, 'index.html')

    return app


__all__ = ['LinkPage', 'create_app']
