from datetime import timedelta
from flask import Blueprint
import click

auth_bp = Blueprint('auth', __name__, url_prefix="/auth")


@auth_bp.cli.command("create-user")
@click.argument("email")
@click.option("--nome", default=None, help="Display name")
@click.option("--admin", "is_admin", is_flag=True, help="Grant the admin role")
def create_user(email: str, nome, is_admin: bool):
    """
    Create a user (or promote an existing one with --admin).
    Usage:
        flask auth create-user ops@example.com --admin
    """
    from extensions import db
    from .models import User, UserRole

    email = email.strip().lower()
    user = User.query.filter_by(email=email).first()
    if user is None:
        user = User(email=email, nome=nome)
        db.session.add(user)
    if is_admin:
        user.papel = UserRole.ADMIN.value
    db.session.commit()
    click.echo(f"{user!r} id={user.id}")


@auth_bp.cli.command("issue-token")
@click.argument("email")
@click.option("--days", default=1, show_default=True, type=int, help="Token lifetime")
def issue_token(email: str, days: int):
    """Print a bearer access token for EMAIL."""
    from .models import User
    from .utils import issue_access_token

    user = User.query.filter_by(email=email.strip().lower()).first()
    if user is None:
        raise click.ClickException(f"no user with email {email}")
    try:
        token = issue_access_token(user, expires_delta=timedelta(days=days))
    except PermissionError as e:
        raise click.ClickException(str(e))
    click.echo(token)
