"""Collectibles statistics for cadence."""

from typing import Dict, Iterable, Optional

from cadence.models.collection import CollectibleItem, CollectionSet, CollectionStatistics, SetProgress


def item_profit_loss(item: CollectibleItem) -> Optional[float]:
    """Current value minus purchase price, or None unless both are known."""
    if item.purchase_price is None or item.current_value is None:
        return None
    return (item.current_value - item.purchase_price) * item.quantity


def _sorted_counts(counts: Dict[str, int]) -> Dict[str, int]:
    # Most common first, name as tie-break
    return dict(sorted(counts.items(), key=lambda kv: (-kv[1], kv[0])))


def collection_statistics(items: Iterable[CollectibleItem]) -> CollectionStatistics:
    """Totals over a collection.

    Prices count once per copy (quantity). Items without a price are left out
    of that price's totals and of the average value.
    """
    total_items = 0
    total_value = 0.0
    total_purchase = 0.0
    valued_items = 0
    duplicates = 0
    categories: Dict[str, int] = {}

    for item in items:
        total_items += item.quantity
        if item.current_value is not None:
            total_value += item.current_value * item.quantity
            valued_items += item.quantity
        if item.purchase_price is not None:
            total_purchase += item.purchase_price * item.quantity
        if item.quantity > 1:
            duplicates += item.quantity - 1
        categories[item.category] = categories.get(item.category, 0) + 1

    return CollectionStatistics(
        total_items=total_items,
        total_value=total_value,
        total_purchase_price=total_purchase,
        profit_loss=total_value - total_purchase,
        average_value=total_value / valued_items if valued_items else 0.0,
        duplicates_count=duplicates,
        category_counts=_sorted_counts(categories),
    )


def set_progress(collection_set: CollectionSet, items: Iterable[CollectibleItem]) -> SetProgress:
    """How much of a set is owned: distinct item names in the set's series."""
    owned = {item.name.strip().lower() for item in items if item.series == collection_set.name}
    completed = min(len(owned), collection_set.total_items)
    percentage = completed / collection_set.total_items * 100 if collection_set.total_items > 0 else 0.0
    return SetProgress(
        set_id=collection_set.id,
        completed_items=completed,
        total_items=collection_set.total_items,
        completion_percentage=percentage,
    )
