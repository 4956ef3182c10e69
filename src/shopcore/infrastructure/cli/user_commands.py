"""CLI commands for notification recipients."""

from __future__ import annotations

import click

from shopcore.domain.model.user import User
from shopcore.infrastructure.bootstrap import user_repository
from shopcore.infrastructure.config import Settings
from shopcore.infrastructure.notifications.push_notifier import is_push_token


@click.command("add")
@click.option("--id", "user_id", required=True, help="User ID.")
@click.option("--name", required=True, help="Display name.")
@click.option("--push-token", default=None, help="Expo push token.")
@click.pass_obj
def user_add(settings: Settings, user_id: str, name: str, push_token: str | None) -> None:
    """Register a user and their push token."""
    if push_token and not is_push_token(push_token):
        raise click.BadParameter(f"'{push_token}' is not an Expo push token",
                                 param_hint="--push-token")
    user_repository(settings).save(User(id=user_id, name=name, push_token=push_token))
    click.echo(f"User '{user_id}' saved.")
