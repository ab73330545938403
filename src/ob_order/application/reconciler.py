"""PoolOrderReconciler — turns pool trigger events into upserted pool orders.

Per event:  allow-list -> pool details -> quote ladder -> buy leg -> sell leg
Per batch:  bounded fan-out over events -> one bulk insert -> notifications

Failures are contained at the smallest unit (item, leg, event) and surface
as Outcome objects; a failed unit never aborts its siblings or the batch.
"""
import asyncio
import logging
from collections.abc import Awaitable, Callable, Collection, Sequence
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from src.ob_common.addresses import normalize_address
from src.ob_common.bps import validate_bps
from src.ob_common.datetime_utils import from_unix_seconds
from src.ob_common.enums import FeeKind, OrderSide, TriggerKind
from src.ob_common.errors import NoTokenSetAvailableError, PoolDetailsNotFoundError
from src.ob_notify.domain.events import OrderChangedEvent, OrderNotifierProtocol
from src.ob_order.application.collector import NewOrderCollector
from src.ob_order.application.outcome import Outcome
from src.ob_order.domain.encoder import PoolOrderEncoder
from src.ob_order.domain.identity import get_order_id
from src.ob_order.domain.models import (
    DerivedOrder,
    FeeBreakdownEntry,
    OrderExpiry,
    OrderRepricing,
    PoolEvent,
    SaveResult,
    ValidityWindow,
)
from src.ob_order.domain.repository import OrderRepositoryProtocol
from src.ob_pools.domain.models import Pool
from src.ob_pools.domain.repository import PoolRepositoryProtocol
from src.ob_pricing.application.sampler import PriceSampler
from src.ob_pricing.domain.models import QuoteLadder
from src.ob_registry.domain.repository import (
    EMPTY_SCHEMA_HASH,
    SourceRepositoryProtocol,
    TokenSetRepositoryProtocol,
)
from src.ob_royalties.domain.calculator import RoyaltyTopUpCalculator
from src.ob_royalties.domain.models import MissingRoyalty

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], AbstractAsyncContextManager[AsyncSession]]


@dataclass(frozen=True)
class ReconcileConfig:
    chain_id: int
    depth: int = 10
    slippage_bps: int = 200
    concurrency: int = 20
    allowed_pools: Collection[str] = ()  # empty = all pools
    source_domain: str = "nftx.io"


@dataclass(frozen=True)
class LegPricing:
    """Pricing shared by every order a leg produces."""

    side: OrderSide
    price: int
    value: int
    prices: list[int]
    currency: str
    fee_bps: int
    fee_breakdown: list[FeeBreakdownEntry]
    normalized_value: int
    missing_royalties: list[MissingRoyalty]


class PoolOrderReconciler:
    def __init__(
        self,
        *,
        config: ReconcileConfig,
        session_factory: SessionFactory,
        sampler: PriceSampler,
        pools: PoolRepositoryProtocol,
        orders: OrderRepositoryProtocol,
        royalties: RoyaltyTopUpCalculator,
        token_sets: TokenSetRepositoryProtocol,
        sources: SourceRepositoryProtocol,
        encoder: PoolOrderEncoder,
        notifier: OrderNotifierProtocol,
    ) -> None:
        if config.concurrency < 1:
            raise ValueError(f"concurrency must be >= 1, got {config.concurrency}")
        validate_bps(config.slippage_bps)
        self._config = config
        self._allowed_pools = {normalize_address(p) for p in config.allowed_pools}
        self._session_factory = session_factory
        self._sampler = sampler
        self._pools = pools
        self._orders = orders
        self._royalties = royalties
        self._token_sets = token_sets
        self._sources = sources
        self._encoder = encoder
        self._notifier = notifier
        # Shared across overlapping batches: at most `concurrency` events in flight.
        self._semaphore = asyncio.Semaphore(config.concurrency)

    # ------------------------------------------------------------------
    # Batch entry point
    # ------------------------------------------------------------------

    async def reconcile(self, events: Sequence[PoolEvent]) -> list[SaveResult]:
        """Reconcile a batch of pool events.

        Returns one SaveResult per order touched by events that got through;
        failed events are absent (details in logs).
        """
        collector = NewOrderCollector()

        async def _bounded(event: PoolEvent) -> Outcome:
            async with self._semaphore:
                return await self._reconcile_event(event, collector)

        outcomes = await asyncio.gather(*(_bounded(e) for e in events))
        results = [r for o in outcomes for r in o.results]

        unsaved = await self._flush(collector)
        if unsaved:
            results = [r for r in results if r not in unsaved]

        await self._notifier.publish([OrderChangedEvent.from_result(r) for r in results])

        logger.info(
            "Reconciled batch: events=%d failed=%d skipped=%d results=%d",
            len(events),
            sum(1 for o in outcomes if not o.ok),
            sum(1 for o in outcomes if o.skipped),
            len(results),
        )
        return results

    async def _flush(self, collector: NewOrderCollector) -> set[SaveResult]:
        """Bulk-insert buffered new orders. Returns the results that were not persisted."""
        orders, results = await collector.drain()
        if not orders:
            return set()
        try:
            async with self._session_factory() as db:
                await self._orders.bulk_insert(orders, db)
                await db.commit()
        except Exception:
            logger.exception("Failed to bulk insert %d new pool orders", len(orders))
            return set(results)
        logger.debug("Bulk inserted %d new pool orders", len(orders))
        return set()

    # ------------------------------------------------------------------
    # Per event
    # ------------------------------------------------------------------

    def is_allowed(self, pool: str) -> bool:
        return not self._allowed_pools or normalize_address(pool) in self._allowed_pools

    async def _reconcile_event(self, event: PoolEvent, collector: NewOrderCollector) -> Outcome:
        scope = f"pool={event.pool} tx={event.tx_hash}"
        if not self.is_allowed(event.pool):
            logger.info("Skipping pool outside allow-list: %s", scope)
            return Outcome(scope=scope, skipped=True)

        try:
            async with self._session_factory() as db:
                pool = await self._pools.get_pool_details(event.pool, db)
                if pool is None:
                    raise PoolDetailsNotFoundError(event.pool)

                ladder = await self._sampler.sample(
                    pool.address,
                    self._config.depth,
                    self._config.slippage_bps,
                    self._config.chain_id,
                )

                buy = await self._isolated(
                    f"{scope} buy-leg",
                    lambda: self._reconcile_buy_leg(event, pool, ladder, collector, db),
                    db,
                )
                sell = await self._isolated(
                    f"{scope} sell-leg",
                    lambda: self._reconcile_sell_leg(event, pool, ladder, collector, db),
                    db,
                )
        except Exception as exc:
            logger.error("Failed to handle pool event %s: %s", scope, exc, exc_info=True)
            return Outcome(scope=scope, error=exc)

        return Outcome.merge(scope, [buy, sell])

    async def _isolated(
        self,
        scope: str,
        work: Callable[[], Awaitable[list[SaveResult]]],
        db: AsyncSession,
        log_level: int = logging.ERROR,
    ) -> Outcome:
        """Run one unit; on failure drop its uncommitted writes and report the error."""
        try:
            return Outcome(scope=scope, results=await work())
        except Exception as exc:
            logger.log(log_level, "Failed to handle %s: %s", scope, exc, exc_info=True)
            try:
                await db.rollback()
            except Exception:
                logger.exception("Rollback failed after %s", scope)
            return Outcome(scope=scope, error=exc)

    # ------------------------------------------------------------------
    # Legs
    # ------------------------------------------------------------------

    async def _reconcile_buy_leg(
        self,
        event: PoolEvent,
        pool: Pool,
        ladder: QuoteLadder,
        collector: NewOrderCollector,
        db: AsyncSession,
    ) -> list[SaveResult]:
        order_id = get_order_id(pool.address, OrderSide.BUY)
        first = ladder.first

        if first.sell_price is None:
            # The pool no longer bids; tombstone the order if there is one
            if not await self._orders.exists(order_id, db):
                return []
            await self._orders.apply_expiry(
                OrderExpiry(id=order_id, expiration=from_unix_seconds(event.tx_timestamp)), db
            )
            await db.commit()
            return [SaveResult(id=order_id, tx_hash=event.tx_hash, trigger_kind=TriggerKind.REPRICE)]

        pricing = await self._price_leg(
            pool,
            OrderSide.BUY,
            prices=ladder.raw_sell_prices(),
            value=first.sell_price,
            fee_bps=first.sell_fee_bps,
            currency=first.currency,
            db=db,
        )
        result = await self._upsert(
            event, pool, pricing, order_id, None, len(pricing.prices), collector, db
        )
        return [result]

    async def _reconcile_sell_leg(
        self,
        event: PoolEvent,
        pool: Pool,
        ladder: QuoteLadder,
        collector: NewOrderCollector,
        db: AsyncSession,
    ) -> list[SaveResult]:
        first = ladder.first
        if first.buy_price is None:
            return []

        pricing = await self._price_leg(
            pool,
            OrderSide.SELL,
            prices=ladder.raw_buy_prices(),
            value=first.buy_price,
            fee_bps=first.buy_fee_bps,
            currency=first.currency,
            db=db,
        )

        item_ids = await self._pools.get_items_held(pool.collection, pool.address, db)
        items: list[Outcome] = []
        for item_id in item_ids:
            items.append(
                await self._isolated(
                    f"pool={pool.address} item={item_id}",
                    lambda item_id=item_id: self._upsert_item(
                        event, pool, pricing, item_id, collector, db
                    ),
                    db,
                    log_level=logging.WARNING,
                )
            )
        merged = Outcome.merge(f"pool={pool.address} sell-leg", items)
        if merged.failed_units:
            logger.warning(
                "Sell leg for pool=%s skipped %d of %d items",
                pool.address,
                merged.failed_units,
                len(item_ids),
            )
        return merged.results

    async def _upsert_item(
        self,
        event: PoolEvent,
        pool: Pool,
        pricing: LegPricing,
        item_id: str,
        collector: NewOrderCollector,
        db: AsyncSession,
    ) -> list[SaveResult]:
        order_id = get_order_id(pool.address, OrderSide.SELL, item_id)
        return [await self._upsert(event, pool, pricing, order_id, item_id, 1, collector, db)]

    async def _price_leg(
        self,
        pool: Pool,
        side: OrderSide,
        *,
        prices: list[int],
        value: int,
        fee_bps: int,
        currency: str,
        db: AsyncSession,
    ) -> LegPricing:
        price = prices[0]
        top_up = await self._royalties.compute(pool.collection_key, price, value, side, db)
        return LegPricing(
            side=side,
            price=price,
            value=value,
            prices=prices,
            currency=currency,
            fee_bps=fee_bps,
            fee_breakdown=[
                FeeBreakdownEntry(kind=FeeKind.MARKETPLACE, recipient=pool.address, bps=fee_bps)
            ],
            normalized_value=top_up.normalized_value,
            missing_royalties=top_up.missing_royalties,
        )

    # ------------------------------------------------------------------
    # Insert-or-update
    # ------------------------------------------------------------------

    async def _upsert(
        self,
        event: PoolEvent,
        pool: Pool,
        pricing: LegPricing,
        order_id: str,
        item_id: str | None,
        quantity_remaining: int,
        collector: NewOrderCollector,
        db: AsyncSession,
    ) -> SaveResult:
        raw_data = self._encoder.encode(
            pool, pricing.side, pricing.price, pricing.prices, item_id=item_id
        )
        validity = ValidityWindow.open_from(event.tx_timestamp)

        if await self._orders.exists(order_id, db):
            await self._orders.apply_repricing(
                OrderRepricing(
                    id=order_id,
                    price=pricing.price,
                    value=pricing.value,
                    normalized_value=pricing.normalized_value,
                    quantity_remaining=quantity_remaining,
                    validity=validity,
                    fee_bps=pricing.fee_bps,
                    fee_breakdown=pricing.fee_breakdown,
                    missing_royalties=pricing.missing_royalties,
                    raw_data=raw_data,
                ),
                db,
            )
            await db.commit()
            return SaveResult(id=order_id, tx_hash=event.tx_hash, trigger_kind=TriggerKind.REPRICE)

        if item_id is None:
            token_set_id = await self._token_sets.save_contract_wide(
                pool.collection, EMPTY_SCHEMA_HASH, db
            )
        else:
            token_set_id = await self._token_sets.save_single_token(
                pool.collection, item_id, EMPTY_SCHEMA_HASH, db
            )
        if not token_set_id:
            raise NoTokenSetAvailableError(
                pool.collection_key if item_id is None else f"token:{pool.collection}:{item_id}"
            )
        source_id = await self._sources.get_or_insert(self._config.source_domain, db)
        await db.commit()

        order = DerivedOrder(
            id=order_id,
            side=pricing.side,
            pool=pool.address,
            collection=pool.collection,
            item_id=item_id,
            token_set_id=token_set_id,
            token_set_schema_hash=EMPTY_SCHEMA_HASH,
            price=pricing.price,
            value=pricing.value,
            currency=pricing.currency,
            normalized_value=pricing.normalized_value,
            fee_bps=pricing.fee_bps,
            fee_breakdown=pricing.fee_breakdown,
            missing_royalties=pricing.missing_royalties,
            quantity_remaining=quantity_remaining,
            validity=validity,
            source_id=source_id,
            raw_data=raw_data,
        )
        result = SaveResult(id=order_id, tx_hash=event.tx_hash, trigger_kind=TriggerKind.NEW_ORDER)
        await collector.add(order, result)
        return result
