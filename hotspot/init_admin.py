import logging
import os

import click
from flask.cli import with_appcontext

from hotspot import db
from hotspot.models.profile import Profile

log = logging.getLogger(__name__)


def ensure_admin(username, password):
    """Create the admin profile, or reset its password if it already exists."""
    profile = Profile.query.filter_by(username=username).first()
    created = profile is None
    if created:
        profile = Profile(username=username)
    profile.password = password
    db.session.add(profile)
    db.session.commit()
    log.info("Admin %s %s.", username, 'created' if created else 'password reset')
    return profile, created


@click.command('create-admin')
@click.option('--username', default=lambda: os.environ.get('ADMIN_USERNAME'))
@click.option('--password', default=lambda: os.environ.get('ADMIN_PASSWORD'))
@with_appcontext
def create_admin_command(username, password):
    """Create or reset the admin login from ADMIN_USERNAME / ADMIN_PASSWORD."""
    if not username or not password:
        raise click.UsageError('ADMIN_USERNAME or ADMIN_PASSWORD not set in environment.')
    _, created = ensure_admin(username, password)
    if created:
        click.echo(f"Admin user {username} created.")
    else:
        click.echo(f"Admin user {username} already exists, password updated.")


@click.command('init-db')
@with_appcontext
def init_db_command():
    """Create the database tables."""
    import hotspot.models  # noqa: F401  registers the models on the metadata
    db.create_all()
    click.echo("Database tables created.")
