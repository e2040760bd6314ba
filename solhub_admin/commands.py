# solhub_admin/commands.py
import click
from flask.cli import with_appcontext

from .core.constants import AdminRole
from .core.errors import APIError
from .extensions import db
from .services import AdminService


@click.command("create-admin")
@click.argument("email")
@click.argument("password")
@click.option(
    "--role",
    type=click.Choice([role.value for role in AdminRole]),
    default=AdminRole.SUPERADMIN.value,
    show_default=True,
)
@with_appcontext
def create_admin_command(email, password, role):
    """Create a dashboard administrator account."""
    try:
        admin = AdminService(db.session).create_admin(email, password, role)
    except APIError as e:
        raise click.ClickException(e.message)
    click.echo(f"Created {admin.role} {admin.email}")


def register_commands(app):
    app.cli.add_command(create_admin_command)
