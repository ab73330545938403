"""Unit tests for the reconcile service layer."""
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from src.ob_common.enums import TriggerKind
from src.ob_order.application import service
from src.ob_order.application.schemas import ReconcileRequest
from src.ob_order.domain.models import PoolEvent, SaveResult

POOL = "0x569A0FF212EFE6B2FAC806765EF59CE6685F2DD2"
TX = "0x" + "ab" * 32


@pytest.mark.asyncio
async def test_reconcile_pool_events_maps_request_and_results() -> None:
    reconciler = MagicMock()
    reconciler.reconcile = AsyncMock(
        return_value=[SaveResult(id="0x01", tx_hash=TX, trigger_kind=TriggerKind.NEW_ORDER)]
    )
    req = ReconcileRequest(events=[{"pool": POOL, "tx_timestamp": 5, "tx_hash": TX}])

    with patch.object(service, "get_reconciler", return_value=reconciler):
        resp = await service.reconcile_pool_events(req)

    reconciler.reconcile.assert_awaited_once_with(
        [PoolEvent(pool=POOL.lower(), tx_timestamp=5, tx_hash=TX)]
    )
    assert [r.trigger_kind for r in resp.results] == ["new-order"]
    assert resp.results[0].status == "success"


@pytest.mark.asyncio
async def test_reconciler_is_built_once_and_closed() -> None:
    await service.close_reconciler()
    try:
        first = service.get_reconciler()
        assert service.get_reconciler() is first
    finally:
        await service.close_reconciler()
    assert service._reconciler is None
