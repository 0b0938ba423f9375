"""
In-memory catalog snapshot.

Facilities, product names and variants belong to the surrounding
catalog application.  This store only holds the latest snapshot it was
handed and swaps it out wholesale; nothing is fetched or cached here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Mapping

from src.domain.entities import Facility, ProductVariant

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogSnapshot:
    facilities: tuple[Facility, ...] = ()
    products: tuple[str, ...] = ()
    variants: Mapping[str, ProductVariant] = field(default_factory=dict)


class CatalogStore:
    def __init__(self, snapshot: CatalogSnapshot | None = None):
        self._snapshot = snapshot or CatalogSnapshot()

    @property
    def snapshot(self) -> CatalogSnapshot:
        return self._snapshot

    def replace(
        self,
        facilities: Iterable[Facility],
        products: Iterable[str] = (),
        variants: Iterable[ProductVariant] = (),
    ) -> CatalogSnapshot:
        """Swap in a new snapshot.  Readers holding the old one are unaffected."""
        facilities = tuple(facilities)
        variant_map = {v.id: v for v in variants}
        # Product names referenced by facilities are always selectable
        names = dict.fromkeys(products)
        for facility in facilities:
            names.update(dict.fromkeys(sorted(facility.products)))
        self._snapshot = CatalogSnapshot(
            facilities=facilities,
            products=tuple(names),
            variants=variant_map,
        )
        logger.info(
            "Catalog replaced: %d facilities, %d products, %d variants",
            len(facilities),
            len(self._snapshot.products),
            len(variant_map),
        )
        return self._snapshot
