"""
hierarchy.py — Max-heap view of every catalog location for the hierarchy page.

Unlike GET /api/rankings (which only ranks locations that have recordings),
the hierarchy shows the whole catalog: each catalog location becomes one
HeapNode in catalog order (zero recordings → average 0), followed by any
locationId found in the data but missing from the catalog, in order of first
appearance. The nodes are fed to MaxHeap.build_heap().

With no recordings at all there is nothing to rank and the heap stays empty.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from app.models.location import Location
from app.models.ranking import HeapNode, HierarchyResponse, LocationAggregate
from app.services.aggregation import aggregate_by_location
from app.services.max_heap import MaxHeap


def catalog_nodes(aggregates: Sequence[LocationAggregate], catalog: Sequence[Location]) -> list[HeapNode]:
    """One node per catalog entry, then one per uncatalogued aggregate."""
    by_id = {agg.location_id: agg for agg in aggregates}
    nodes: list[HeapNode] = []

    for location in catalog:
        agg = by_id.pop(location.id, None)
        if agg is None:
            nodes.append(HeapNode(location_id=location.id, location_name=location.name, average_score=0.0))
        else:
            node = HeapNode.from_aggregate(agg)
            # The catalog name wins over whatever label the first upload carried.
            nodes.append(node.model_copy(update={"location_name": location.name}))

    nodes.extend(HeapNode.from_aggregate(agg) for agg in by_id.values())
    return nodes


def build_heap(recordings: Iterable[Any], catalog: Sequence[Location]) -> MaxHeap[HeapNode]:
    heap: MaxHeap[HeapNode] = MaxHeap()
    aggregates = aggregate_by_location(recordings)
    if aggregates:
        heap.build_heap(catalog_nodes(aggregates, catalog))
    return heap


def build_hierarchy(recordings: Iterable[Any], catalog: Sequence[Location]) -> HierarchyResponse:
    """Root, size, sorted order and tree levels of the catalog heap."""
    heap = build_heap(recordings, catalog)
    return HierarchyResponse(
        size=heap.size(),
        root=heap.peek(),
        sorted=heap.to_sorted_descending(),
        levels=heap.to_levels(),
    )
