"""Scan order for the matching engine."""

from weighmatch import Competitor


def order_competitors(competitors: list[Competitor]) -> list[Competitor]:
    """Sort competitors into matching order.

    Priority competitors come first, then weight ascending. ``sorted`` is
    stable, so competitors equal on both keys keep their input order; the
    matching result depends on this.

    Args:
        competitors: Competitor snapshot in input order.

    Returns:
        New list in scan order.
    """
    return sorted(competitors, key=lambda c: (not c.priority, c.weight))
