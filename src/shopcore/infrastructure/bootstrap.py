"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.  Settings are loaded once
by the CLI entry point and passed into each factory here.
"""

from __future__ import annotations

from shopcore.application.side_effects import SideEffectDispatcher
from shopcore.domain.service.stock_ledger import StockLedger
from shopcore.infrastructure.config import Settings
from shopcore.infrastructure.notifications.push_notifier import PushNotifier
from shopcore.infrastructure.persistence.json_line_item_repository import (
    JsonLineItemRepository,
)
from shopcore.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from shopcore.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from shopcore.infrastructure.persistence.json_user_repository import (
    JsonUserRepository,
)
from shopcore.infrastructure.proof_storage import ProofStorage


def product_repository(settings: Settings) -> JsonProductRepository:
    return JsonProductRepository(settings.data_dir / "products.json")


def line_item_repository(settings: Settings) -> JsonLineItemRepository:
    return JsonLineItemRepository(settings.data_dir / "line_items.json")


def order_repository(settings: Settings) -> JsonOrderRepository:
    return JsonOrderRepository(settings.data_dir / "orders.json")


def user_repository(settings: Settings) -> JsonUserRepository:
    return JsonUserRepository(settings.data_dir / "users.json")


def stock_ledger(settings: Settings) -> StockLedger:
    return StockLedger(
        product_repository(settings), max_retries=settings.ledger_max_retries
    )


def side_effect_dispatcher(settings: Settings) -> SideEffectDispatcher:
    return SideEffectDispatcher(
        line_item_repo=line_item_repository(settings),
        user_repo=user_repository(settings),
        ledger=stock_ledger(settings),
        notifier=PushNotifier(),
    )


def proof_storage(settings: Settings) -> ProofStorage:
    return ProofStorage(settings.uploads_dir, settings.proof_base_url)
