"""Outbound notification port."""

from __future__ import annotations

from abc import ABC, abstractmethod

from shopcore.domain.model.side_effects import NotificationKind


class Notifier(ABC):

    @abstractmethod
    def notify(
        self,
        recipient_token: str,
        kind: NotificationKind,
        context: dict[str, str],
    ) -> None:
        """Hand a notification to the delivery service.

        Raises NotificationFailure when it cannot be handed over.
        """
