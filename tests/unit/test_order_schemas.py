"""Unit tests for ob_order Pydantic schemas."""
import pytest
from pydantic import ValidationError

from src.ob_common.enums import TriggerKind
from src.ob_order.application.schemas import PoolEventIn, ReconcileRequest, SaveResultOut
from src.ob_order.domain.models import SaveResult

POOL = "0x569A0FF212EFE6B2FAC806765EF59CE6685F2DD2"
TX = "0x" + "ab" * 32


class TestPoolEventIn:
    def test_to_domain_lowercases_pool(self) -> None:
        event = PoolEventIn(pool=POOL, tx_timestamp=1_760_000_000, tx_hash=TX).to_domain()
        assert event.pool == POOL.lower()
        assert event.tx_timestamp == 1_760_000_000
        assert event.tx_hash == TX

    def test_short_address_raises(self) -> None:
        with pytest.raises(ValidationError):
            PoolEventIn(pool="0x1234", tx_timestamp=1, tx_hash=TX)

    def test_negative_timestamp_raises(self) -> None:
        with pytest.raises(ValidationError):
            PoolEventIn(pool=POOL, tx_timestamp=-1, tx_hash=TX)

    def test_bad_tx_hash_raises(self) -> None:
        with pytest.raises(ValidationError):
            PoolEventIn(pool=POOL, tx_timestamp=1, tx_hash="0xabc")


class TestReconcileRequest:
    def test_empty_events_raises(self) -> None:
        with pytest.raises(ValidationError):
            ReconcileRequest(events=[])

    def test_oversized_batch_raises(self) -> None:
        event = {"pool": POOL, "tx_timestamp": 1, "tx_hash": TX}
        with pytest.raises(ValidationError):
            ReconcileRequest(events=[event] * 501)


def test_save_result_out_from_domain() -> None:
    out = SaveResultOut.from_domain(
        SaveResult(id="0x01", tx_hash=TX, trigger_kind=TriggerKind.REPRICE)
    )
    assert out.model_dump() == {
        "id": "0x01",
        "tx_hash": TX,
        "status": "success",
        "trigger_kind": "reprice",
    }
