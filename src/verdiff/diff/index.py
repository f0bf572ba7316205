"""Entity-id indexing for versioned collections.

The diff engine matches items across two collections by entity id.  Both
sides are indexed once so that each lookup is a dict access rather than a
scan of the other collection.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from verdiff.errors import InvalidInputError


def default_entity_key(item: Any) -> Any:
    return item.entity_id


def default_version_key(item: Any) -> Any:
    return item.version_number


def index_by_entity(
    items: Iterable[Any],
    *,
    entity_key: Callable[[Any], Any] = default_entity_key,
    side: str = "source",
    check_duplicates: bool = True,
) -> dict[Any, Any]:
    """Map each item's entity id to the item.

    Parameters
    ----------
    items:
        The collection to index.  Iteration order is preserved in the
        returned dict.
    entity_key:
        Extracts the entity id from an item.
    side:
        ``"source"`` or ``"target"``; reported in the error context.
    check_duplicates:
        When ``True`` a repeated entity id raises.  When ``False`` the last
        occurrence replaces earlier ones.

    Returns
    -------
    dict
        Entity id to item.

    Raises
    ------
    InvalidInputError
        If *check_duplicates* is set and an entity id occurs twice.
    """
    index: dict[Any, Any] = {}
    for item in items:
        key = entity_key(item)
        if check_duplicates and key in index:
            raise InvalidInputError(
                message=f"Duplicate entity id {key!r} in {side} collection",
                context={"side": side, "entity_id": key},
            )
        index[key] = item
    return index
