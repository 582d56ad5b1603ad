from receipt_worker.extraction.models import Reconciliation

ABSOLUTE_TOLERANCE = 0.05
RELATIVE_TOLERANCE = 0.01


def reconcile(
    subtotal: float | None,
    tax: float | None,
    total: float | None,
) -> Reconciliation:
    """Decide the authoritative total from the extracted figures.

    When subtotal and tax are both known, their sum replaces the extracted
    total if the total is missing or within max(5 cents, 1%) of the sum.
    Otherwise the extracted total is kept and the result is not reconciled.
    """
    if subtotal is None or tax is None:
        return Reconciliation(total=total, reconciled=False)

    expected = subtotal + tax
    if total is None or within_tolerance(expected, total):
        return Reconciliation(total=expected, reconciled=True)
    return Reconciliation(total=total, reconciled=False)


def within_tolerance(expected: float, actual: float) -> bool:
    tolerance = max(ABSOLUTE_TOLERANCE, expected * RELATIVE_TOLERANCE)
    # Rounding keeps float noise (0.05000000000000071) inside the band.
    return round(abs(expected - actual), 6) <= tolerance
