"""Command-line helpers for seeding accounts."""
import click
from sqlalchemy.exc import SQLAlchemyError

from src import db
from src.auth import auth_bp
from src.auth.models import User
from src.auth.roles import Role
from src.auth.utils import hash_password


@auth_bp.cli.command("create-admin")
@click.argument("username")
@click.argument("password")
def create_admin(username, password):
    """Create an administrator account, or promote an existing user."""
    user = User.query.filter_by(username=username).first()
    if user is None:
        user = User(username=username, password_hash=hash_password(password), role=Role.ADMIN)
        db.session.add(user)
    else:
        user.password_hash = hash_password(password)
        user.role = Role.ADMIN

    try:
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise click.ClickException(f"Could not save admin account: {exc}")

    click.echo(f"Admin account '{username}' is ready.")
