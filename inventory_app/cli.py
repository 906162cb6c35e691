import click
from flask import current_app

from inventory_app.extensions import db
from inventory_app.models.user import User


def register_commands(app):
    @app.cli.command("init-db")
    def init_db():
        """Create all tables (use `flask db upgrade` once migrations exist)."""
        db.create_all()
        click.echo("Database tables created.")

    @app.cli.command("create-admin")
    @click.option("--name", default="Administrator", show_default=True)
    @click.option("--email", prompt=True)
    @click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
    def create_admin(name, email, password):
        """Create an administrator account, or promote an existing user."""
        from inventory_app.services.auth_service import AuthService
        from inventory_app.repositories.user_repo import UserRepo

        email = email.strip().lower()
        user = UserRepo.get_by_email(email)
        if user:
            user.role = User.ROLE_ADMIN
            UserRepo.update()
            click.echo(f"User {email} promoted to admin.")
        else:
            _token, user = AuthService.register(name, email, password, role=User.ROLE_ADMIN)
            click.echo(f"Admin {email} created.")
        current_app.logger.info(f"[cli] admin user={user.id}")
