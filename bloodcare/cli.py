import click
from flask import current_app

from .database import db


def register_commands(app):
    @app.cli.command("init-db")
    def init_db():
        """Create the users and donation_requests tables."""
        db.create_all()
        click.echo("Database initialized")

    @app.cli.command("make-admin")
    @click.argument("email")
    def make_admin(email):
        """Promote an already signed-in user to admin."""
        users = current_app.extensions["bloodcare"].users
        user = users.get_user(email)
        if user is None:
            raise click.ClickException(f"No user with email {email}; sign in once first")
        users.set_role(user.id, "admin")
        click.echo(f"{email} is now an admin")

    @app.cli.command("list-users")
    def list_users():
        users = current_app.extensions["bloodcare"].users
        for u in users.list_all(exclude_email=None):
            click.echo(f"{u.id}  {u.email}  {u.role}  {u.status}")
