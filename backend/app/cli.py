# Overview: Flask CLI command groups for bootstrap, backup and restore.

# backend/app/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to wsgi.py (PowerShell: $env:FLASK_APP="wsgi.py").
# - Use: python -m flask <group> <command> [options]
#
# System bootstrap/repair:
# - python -m flask system init
#   Idempotent bootstrap: creates missing tables and seeds the starter menu
#   and expense categories into empty tables.
# - python -m flask system reset-db --yes
#   DEV/TEST only: drop and recreate all tables (deletes all data).
# - python -m flask system wipe --yes
#   Delete every row of every table, keeping the schema.
#
# Backup/restore:
# - python -m flask backup export --output pos_backup.json
#   Write a backup document (same format as GET /api/backup). Without
#   --output the document is printed to stdout.
# - python -m flask backup restore pos_backup.json --yes
#   Replace the whole store with the content of a backup document.

import json

import click
from flask import current_app
from flask.cli import with_appcontext

from .extensions import db
from .services import backup_service
from .services.backup_service import RestoreError
from .services.seed_service import seed_defaults
from .validation import ValidationError


@click.group('system')
def system_group():
    """System bootstrap and repair commands."""


@system_group.command('init')
@with_appcontext
def init_system():
    """
    Initialize the store: tables plus starter data.

    Creates:
    - Any missing table
    - Expense categories: Loyer, Electricité, Eau, Autres (if none exist)
    - A five-item starter menu (if no product exists)
    """
    click.echo("START Initializing RestoPOS...")

    db.create_all()
    click.echo("PASS Tables ready")

    inserted = seed_defaults(db.session)
    for table, count in inserted.items():
        if count:
            click.echo(f"PASS Seeded {count} {table}")
        else:
            click.echo(f"WARN  {table} already populated, skipping...")

    click.echo("DONE RestoPOS initialized")


@system_group.command('reset-db')
@click.option('--yes', is_flag=True, help='Skip confirmation')
@with_appcontext
def reset_db(yes):
    """
    DANGER: Drop all tables and recreate schema.

    This will DELETE ALL DATA!
    """
    if not yes:
        click.confirm("WARN This will DELETE ALL DATA. Are you sure?", abort=True)

    click.echo("DELETE  Dropping all tables...")
    db.drop_all()

    click.echo("BUILD  Creating all tables...")
    db.create_all()

    click.echo("PASS Database reset complete. Run 'python -m flask system init' to seed starter data.")


@system_group.command('wipe')
@click.option('--yes', is_flag=True, help='Skip confirmation')
@with_appcontext
def wipe_data(yes):
    """
    Delete every product, sale, expense and category.

    Runs as an empty restore, so it is all-or-nothing like /api/restore.
    """
    if not yes:
        click.confirm("WARN This will DELETE all data. Are you sure?", abort=True)

    backup_service.restore_backup(db.session, {})
    click.echo("PASS All tables emptied")


@click.group('backup')
def backup_group():
    """Backup export and restore."""


@backup_group.command('export')
@click.option('--output', '-o', type=click.Path(dir_okay=False, writable=True), help='File to write (default: stdout)')
@with_appcontext
def export_backup_cli(output):
    """Write the whole store as a backup document."""
    document = backup_service.export_backup(
        db.session,
        version=current_app.config["BACKUP_FORMAT_VERSION"],
    )
    text = json.dumps(document, indent=2, ensure_ascii=False)

    if not output:
        click.echo(text)
        return

    with open(output, "w", encoding="utf-8") as fh:
        fh.write(text)

    summary = ", ".join(f"{key}={len(rows)}" for key, rows in document["data"].items())
    click.echo(f"PASS Backup written to {output} ({summary})", err=True)


@backup_group.command('restore')
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.option('--yes', is_flag=True, help='Skip confirmation')
@with_appcontext
def restore_backup_cli(path, yes):
    """Replace the whole store with the backup document at PATH."""
    with open(path, encoding="utf-8") as fh:
        try:
            document = json.load(fh)
        except json.JSONDecodeError as e:
            raise click.ClickException(f"Invalid JSON in {path}: {e}")

    try:
        data = backup_service.validate_envelope(document)
    except ValidationError as e:
        raise click.ClickException(str(e))

    if not yes:
        click.confirm("WARN This will REPLACE ALL DATA with the backup content. Are you sure?", abort=True)

    try:
        counts = backup_service.restore_backup(db.session, data)
    except RestoreError as e:
        raise click.ClickException(f"Restore failed, nothing was changed: {e}")

    summary = ", ".join(f"{key}={count}" for key, count in counts.items())
    click.echo(f"PASS Restore complete ({summary})")


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(system_group)
    app.cli.add_command(backup_group)
