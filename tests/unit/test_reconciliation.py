import pytest

from receipt_worker.extraction.reconciliation import reconcile


class TestReconcile:
    def test_consistent_figures_are_reconciled(self) -> None:
        result = reconcile(12.00, 0.72, 12.72)

        assert result.reconciled is True
        assert result.total == pytest.approx(12.72)

    @pytest.mark.parametrize(("subtotal", "tax"), [(12.00, 0.72), (0.0, 0.0), (99.99, 8.25)])
    def test_missing_total_uses_sum(self, subtotal: float, tax: float) -> None:
        result = reconcile(subtotal, tax, None)

        assert result.reconciled is True
        assert result.total == pytest.approx(subtotal + tax)

    def test_missing_total_keeps_unrounded_sum(self) -> None:
        result = reconcile(0.125, 0.0, None)

        assert result.reconciled is True
        assert result.total == 0.125

    def test_within_relative_tolerance_accepts_sum(self) -> None:
        result = reconcile(100.00, 8.00, 108.90)

        assert result.reconciled is True
        assert result.total == pytest.approx(108.0)

    def test_outside_relative_tolerance_keeps_original(self) -> None:
        result = reconcile(100.00, 8.00, 110.00)

        assert result.reconciled is False
        assert result.total == 110.00

    def test_absolute_tolerance_for_small_amounts(self) -> None:
        assert reconcile(2.00, 0.10, 2.14).reconciled is True
        assert reconcile(2.00, 0.10, 2.15).reconciled is True
        assert reconcile(2.00, 0.10, 2.16).reconciled is False

    def test_missing_subtotal_keeps_total(self) -> None:
        result = reconcile(None, 0.72, 12.72)

        assert result.reconciled is False
        assert result.total == 12.72

    def test_nothing_known(self) -> None:
        result = reconcile(None, None, None)

        assert result.reconciled is False
        assert result.total is None
