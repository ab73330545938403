# src/ob_order/application/service.py
"""Wires the reconciler from settings and exposes the batch operation."""
from config.settings import settings
from src.ob_common.database import async_session_factory
from src.ob_notify.infrastructure.queue import OrderUpdatesQueue
from src.ob_order.application.reconciler import PoolOrderReconciler, ReconcileConfig
from src.ob_order.application.schemas import (
    ReconcileRequest,
    ReconcileResponse,
    SaveResultOut,
)
from src.ob_order.domain.encoder import PoolOrderEncoder
from src.ob_order.infrastructure.persistence import OrderRepository
from src.ob_pools.infrastructure.persistence import PoolRepository
from src.ob_pricing.application.sampler import PriceSampler
from src.ob_pricing.infrastructure.oracle_client import HttpPricingOracle
from src.ob_registry.infrastructure.sources import SourceRepository
from src.ob_registry.infrastructure.token_sets import TokenSetRepository
from src.ob_royalties.domain.calculator import RoyaltyTopUpCalculator
from src.ob_royalties.infrastructure.persistence import RoyaltyRegistry

_oracle: HttpPricingOracle | None = None
_reconciler: PoolOrderReconciler | None = None


def build_reconciler() -> PoolOrderReconciler:
    global _oracle  # noqa: PLW0603
    _oracle = HttpPricingOracle(
        settings.PRICING_ORACLE_URL,
        timeout=settings.PRICING_ORACLE_TIMEOUT_SECONDS,
    )
    return PoolOrderReconciler(
        config=ReconcileConfig(
            chain_id=settings.CHAIN_ID,
            depth=settings.POOL_PRICE_DEPTH,
            slippage_bps=settings.POOL_PRICE_SLIPPAGE_BPS,
            concurrency=settings.RECONCILE_CONCURRENCY,
            allowed_pools=settings.ALLOWED_POOLS,
            source_domain=settings.ORDER_SOURCE_DOMAIN,
        ),
        session_factory=async_session_factory,
        sampler=PriceSampler(_oracle),
        pools=PoolRepository(),
        orders=OrderRepository(),
        royalties=RoyaltyTopUpCalculator(RoyaltyRegistry()),
        token_sets=TokenSetRepository(),
        sources=SourceRepository(),
        encoder=PoolOrderEncoder(settings.CHAIN_ID),
        notifier=OrderUpdatesQueue(settings.ORDER_UPDATES_QUEUE),
    )


def get_reconciler() -> PoolOrderReconciler:
    global _reconciler  # noqa: PLW0603
    if _reconciler is None:
        _reconciler = build_reconciler()
    return _reconciler


async def close_reconciler() -> None:
    global _oracle, _reconciler  # noqa: PLW0603
    if _oracle is not None:
        await _oracle.aclose()
    _oracle = None
    _reconciler = None


async def reconcile_pool_events(req: ReconcileRequest) -> ReconcileResponse:
    results = await get_reconciler().reconcile([e.to_domain() for e in req.events])
    return ReconcileResponse(results=[SaveResultOut.from_domain(r) for r in results])
