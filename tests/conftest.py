"""
Shared fixtures for linkpage tests.

Every test gets a Flask app pointed at a fresh temporary data directory,
seeded with the default documents and an admin account.
"""

import pytest

from linkpage import create_app
from linkpage.modules.auth.rate_limiter import LoginRateLimiter
from linkpage.modules.auth.utils import hash_password

ADMIN_USERNAME = 'admin'
ADMIN_PASSWORD = 'correct-horse'


class FakeClock:
    """Manually advanced time source for the rate limiter"""

    def __init__(self, start=1_000_000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def data_dir(tmp_path):
    d = tmp_path / 'data'
    d.mkdir()
    return d


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def app(tmp_path, data_dir, clock):
    """Flask app with seeded documents and a controllable rate limiter clock."""
    app = create_app({
        'TESTING': True,
        'SECRET_KEY': 'test-secret',
        'DATA_DIR': str(data_dir),
        'STATIC_FOLDER': str(tmp_path / 'public'),
        'LOG_LEVEL': 'WARNING',
    })

    ext = app.extensions['linkpage']
    ext.store.seed_defaults()
    ext.store.write('auth', {
        'username': ADMIN_USERNAME,
        'passwordHash': hash_password(ADMIN_PASSWORD, rounds=4),
    })
    ext.rate_limiter = LoginRateLimiter(
        max_attempts=app.config['LOGIN_MAX_ATTEMPTS'],
        window_seconds=app.config['LOGIN_LOCKOUT_SECONDS'],
        clock=clock,
    )
    return app


@pytest.fixture
def store(app):
    return app.extensions['linkpage'].store


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(app):
    """Test client whose session is already authenticated"""
    client = app.test_client()
    with client.session_transaction() as sess:
        sess['isAuthenticated'] = True
        sess['username'] = ADMIN_USERNAME
    return client


@pytest.fixture
def credentials():
    return {'username': ADMIN_USERNAME, 'password': ADMIN_PASSWORD}
