"""Push notifier for Expo-registered devices.

Delivery itself belongs to the push service; this adapter checks the
device token, renders the message and hands it over through ``transport``.
The default transport only logs the message.
"""

from __future__ import annotations

import logging
import re
from typing import Callable

from shopcore.domain.exceptions import NotificationFailure
from shopcore.domain.model.side_effects import NotificationKind
from shopcore.domain.notifier import Notifier
from shopcore.infrastructure.notifications.templates import render

_EXPO_TOKEN = re.compile(r"^(ExponentPushToken|ExpoPushToken)\[[^\]]+\]$")

_module_logger = logging.getLogger("shopcore.notifications")

Transport = Callable[[dict], None]


def is_push_token(token: str) -> bool:
    return bool(_EXPO_TOKEN.match(token))


class PushNotifier(Notifier):

    def __init__(
        self,
        transport: Transport | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._log = logger or _module_logger
        self._transport = transport or self._log_message

    def notify(
        self,
        recipient_token: str,
        kind: NotificationKind,
        context: dict[str, str],
    ) -> None:
        if not is_push_token(recipient_token):
            raise NotificationFailure(
                f"Push token {recipient_token} is not a valid Expo push token"
            )

        title, body = render(kind, context)
        message = {
            "to": recipient_token,
            "sound": "default",
            "title": title,
            "body": body,
            "data": {"type": kind.value, **context},
            "priority": "high",
        }
        try:
            self._transport(message)
        except Exception as exc:
            raise NotificationFailure(f"Push delivery failed: {exc}") from exc

    def _log_message(self, message: dict) -> None:
        self._log.info("Push notification to %s: %s - %s",
                       message["to"], message["title"], message["body"])
