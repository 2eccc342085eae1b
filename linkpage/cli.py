"""
CLI commands for data directory setup and credential rotation.

Usage:
    flask --app linkpage setup [--username admin] [--password ...] [--force]
    flask --app linkpage set-password
    flask --app linkpage migrate-links
"""

import click
from flask import current_app
from flask.cli import with_appcontext

from .core.storage import StorageError
from .modules.auth.utils import hash_password
from .modules.links.migrations import migrate_links

DEFAULT_USERNAME = 'admin'
DEFAULT_PASSWORD = 'admin123'


def _store():
    return current_app.extensions['linkpage'].store


def write_credentials(store, username, password):
    """Replace auth.json with a fresh bcrypt hash"""
    with store.lock('auth'):
        store.write('auth', {
            'username': username,
            'passwordHash': hash_password(password),
        })


@click.command('setup')
@click.option('--username', '-u', default=None, help='Admin username')
@click.option('--password', '-p', default=None, help='Admin password')
@click.option('--force', '-f', is_flag=True, help='Overwrite existing data files')
@click.option('--non-interactive', is_flag=True, help='Skip prompts, use defaults')
@with_appcontext
def setup_command(username, password, force, non_interactive):
    """Create the data directory, default documents and admin credentials."""
    store = _store()

    click.secho('=== Link Sharing Page Setup ===', fg='cyan', bold=True)
    try:
        written = store.seed_defaults(overwrite=force)
    except StorageError as e:
        click.secho(f'✗ Setup failed: {e}', fg='red')
        raise SystemExit(1)

    for kind in written:
        click.echo(f'✓ Created {kind}.json')
    if not written:
        click.echo('  Data files already exist (use --force to overwrite)')

    if store.exists('auth') and not force:
        click.echo('  auth.json already exists; use set-password to change credentials')
        return

    if username is None:
        username = DEFAULT_USERNAME if non_interactive else click.prompt(
            'Admin username', default=DEFAULT_USERNAME
        )
    if password is None:
        password = DEFAULT_PASSWORD if non_interactive else click.prompt(
            'Admin password', default=DEFAULT_PASSWORD, hide_input=True, show_default=False
        )

    username = username.strip() or DEFAULT_USERNAME
    password = password.strip() or DEFAULT_PASSWORD

    try:
        write_credentials(store, username, password)
    except StorageError as e:
        click.secho(f'✗ Setup failed: {e}', fg='red')
        raise SystemExit(1)

    click.echo(f'✓ Created auth.json for user "{username}"')
    if password == DEFAULT_PASSWORD:
        click.secho('  Default password in use; change it with set-password', fg='yellow')
    click.secho('Setup complete!', fg='green')


@click.command('set-password')
@click.option('--username', '-u', prompt='Admin username', help='Admin username')
@click.password_option('--password', '-p', help='New admin password')
@with_appcontext
def set_password_command(username, password):
    """Rotate the admin credentials."""
    username = username.strip()
    if not username or not password:
        click.secho('✗ Username and password are required', fg='red')
        raise SystemExit(1)
    try:
        write_credentials(_store(), username, password)
    except StorageError as e:
        click.secho(f'✗ Could not save credentials: {e}', fg='red')
        raise SystemExit(1)
    click.secho(f'✓ Credentials updated for user "{username}"', fg='green')


@click.command('migrate-links')
@with_appcontext
def migrate_links_command():
    """Upgrade links.json to the current link format."""
    if migrate_links(_store()):
        click.secho('✓ links.json migrated', fg='green')
    else:
        click.echo('links.json already up to date (or not readable, see log)')


def register_commands(app):
    app.cli.add_command(setup_command)
    app.cli.add_command(set_password_command)
    app.cli.add_command(migrate_links_command)
