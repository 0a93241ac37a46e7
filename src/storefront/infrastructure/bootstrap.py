"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from storefront.application.login_attempts import LoginAttemptService
from storefront.domain.model.login_attempts import AttemptPolicy
from storefront.domain.model.pricing import PricingPolicy
from storefront.domain.model.value_objects import Money
from storefront.domain.service.login_attempt_guard import LoginAttemptGuard
from storefront.infrastructure.config import Settings, load_settings
from storefront.infrastructure.persistence.json_cart_repository import JsonCartRepository
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from storefront.infrastructure.persistence.redis_counter_store import RedisCounterStore


def product_repository(settings: Settings | None = None) -> JsonProductRepository:
    settings = settings or load_settings()
    return JsonProductRepository(settings.data_dir / "products.json")


def cart_repository(settings: Settings | None = None) -> JsonCartRepository:
    settings = settings or load_settings()
    return JsonCartRepository(settings.data_dir / "carts.json")


def pricing_policy(settings: Settings | None = None) -> PricingPolicy:
    settings = settings or load_settings()
    return PricingPolicy(
        tax_rate=settings.tax_rate,
        free_shipping_threshold=Money(settings.free_shipping_threshold),
        flat_shipping=Money(settings.flat_shipping),
    )


def counter_store(settings: Settings | None = None) -> RedisCounterStore:
    settings = settings or load_settings()
    return RedisCounterStore.connect(
        settings.redis_url,
        host=settings.redis_host,
        port=settings.redis_port,
        username=settings.redis_username,
        password=settings.redis_password,
        socket_timeout=settings.redis_socket_timeout,
    )


def login_attempt_service(settings: Settings | None = None) -> LoginAttemptService:
    settings = settings or load_settings()
    policy = AttemptPolicy(
        max_attempts=settings.login_max_attempts,
        block_seconds=settings.login_block_seconds,
        window_seconds=settings.login_window_seconds,
    )
    return LoginAttemptService(LoginAttemptGuard(counter_store(settings), policy))
