"""Tests for ob_common.enums — values must match DB CHECK constraints and
the order-updates queue contract."""

from src.ob_common.enums import (
    ApprovalStatus,
    FeeKind,
    FillabilityStatus,
    OrderSide,
    SaveStatus,
    TriggerKind,
)


class TestEnumValues:
    def test_order_side(self) -> None:
        assert isinstance(OrderSide.BUY, str)
        assert {s.value for s in OrderSide} == {"buy", "sell"}

    def test_fillability_status(self) -> None:
        assert {s.value for s in FillabilityStatus} == {"fillable", "no-balance"}

    def test_approval_status(self) -> None:
        assert ApprovalStatus.APPROVED == "approved"

    def test_trigger_kind(self) -> None:
        assert TriggerKind.NEW_ORDER == "new-order"
        assert TriggerKind.REPRICE == "reprice"

    def test_save_status(self) -> None:
        assert SaveStatus.SUCCESS == "success"

    def test_fee_kind(self) -> None:
        assert {k.value for k in FeeKind} == {"marketplace"}
