# cli.py
"""
Flask CLI commands for the event portal.
Account bootstrap and demo data; schema migrations go through `flask db` (Flask-Migrate).
"""

from datetime import timedelta

import click
from flask.cli import with_appcontext

from ceps.errors import CEPSError
from ceps.extensions import db
from ceps.models.base import utcnow


@click.command("init-db")
@with_appcontext
def init_db():
    """Create all database tables."""
    db.create_all()
    click.echo("Database tables created.")


@click.command("create-user")
@click.argument("email")
@click.option("--name", required=True, help="Display name")
@click.option("--role", type=click.Choice(['student', 'faculty', 'admin']), default='faculty',
              show_default=True)
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
@with_appcontext
def create_user(email, name, role, password):
    """
    Create an account with any role.

    Example usage:
        flask create-user hod@college.edu --name "Head of Department" --role admin
    """
    from ceps.services.user_service import UserService

    try:
        user = UserService.create_user(name=name, email=email, password=password, role=role)
    except CEPSError as e:
        click.echo(f"Error creating user: {e.message}", err=True)
        raise SystemExit(1)

    click.echo(f"Created {user.role} account {user.email} ({user.id})")


@click.command("list-users")
@click.option("--role", type=click.Choice(['student', 'faculty', 'admin']), default=None)
@with_appcontext
def list_users(role):
    """List accounts, optionally filtered by role."""
    from ceps.services.user_service import UserService

    users = UserService.list_users(role=role)
    if not users:
        click.echo("No users found")
        return

    click.echo(f"{'Email':<35} {'Name':<30} {'Role':<10}")
    click.echo("-" * 75)
    for user in users:
        click.echo(f"{user.email[:35]:<35} {user.name[:30]:<30} {user.role:<10}")


@click.command("seed-demo")
@click.option("--dry-run", is_flag=True, help="Show what would be created without making changes")
@with_appcontext
def seed_demo(dry_run):
    """Create a faculty account, a student account and one upcoming event."""
    from ceps.models import User, Event
    from ceps.services.user_service import UserService
    from ceps.services.event_service import EventService

    accounts = [
        ('Demo Faculty', 'faculty@ceps.local', 'faculty'),
        ('Demo Student', 'student@ceps.local', 'student'),
    ]
    event_title = 'Orientation Hackathon'

    if dry_run:
        for name, email, role in accounts:
            click.echo(f"Would create {role} account {email} ({name})")
        click.echo(f"Would create event '{event_title}'")
        click.echo("\nDRY RUN - No changes were made.")
        return

    created = {}
    for name, email, role in accounts:
        existing = db.session.query(User).filter_by(email=email).first()
        if existing:
            click.echo(f"Account {email} already exists, skipping")
            created[role] = existing
            continue
        created[role] = UserService.create_user(name=name, email=email, password='password123', role=role)
        click.echo(f"Created {role} account {email} (password: password123)")

    if db.session.query(Event).filter_by(title=event_title).first():
        click.echo(f"Event '{event_title}' already exists, skipping")
        return

    event = EventService.create_event({
        'title': event_title,
        'description': 'A day-long hackathon for first-year students.',
        'date': (utcnow() + timedelta(days=14)).date().isoformat(),
        'venue': 'Main Auditorium',
    }, created_by=created['faculty'])
    click.echo(f"Created event '{event.title}' ({event.id})")


def register_cli_commands(app):
    """Register all custom CLI commands with the Flask app."""
    app.cli.add_command(init_db)
    app.cli.add_command(create_user)
    app.cli.add_command(list_users)
    app.cli.add_command(seed_demo)
