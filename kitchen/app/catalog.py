# catalog.py

"""Immutable reference data: valid tables and the menu.

The catalog is built once at startup and shared by every request. Lookups are
plain set and mapping membership checks and never touch storage.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping

from .domain import Menu

SEED_MENUS: tuple[str, ...] = (
    "Tuna",
    "Lean Tuna",
    "Albacore Tuna",
    "Seared Bonito",
    "Salmon",
    "Onion Salmon",
    "Broiled Fatty Salmon",
    "Broiled Fatty Salmon Radish",
    "Broiled Salmon w/ Basil Sauce",
    "Spicy Salmon & Fried Leek",
    "Salmon Basil Mozzarella",
    "Young Yellowtail",
    "Pickled Yellowtail",
    "Flounder Fin",
    "Grilled Mackerel",
    "Grilled Herring Sushi",
    "Seabream",
    "Boiled Shrimp",
    "Shrimp w/ Cheese",
    "Shrimp w/ Avocado",
    "Fresh Shrimp",
    "Sweet Shrimp",
    "Abalone",
    "Black Mirugai Clam",
    "Extra Large Scallop",
    "Squid",
    "Cuttlefish",
    "Squid Ume Plum & Shiso",
    "Boiled Octopus",
    "Grilled Eel",
    "Cooked Conger Eel",
    "Premium Grill Conger Eel",
    "Japanese Egg Omelet",
    "Kalbi Beef w/ Salt",
    "Seared Wagyu Beef",
    "Imitation Crab Meat Tempura",
)


@dataclass(frozen=True)
class Catalog:
    """Snapshot of valid table ids and menu items."""

    tables: frozenset[int]
    menus: Mapping[int, str] = field(default_factory=lambda: MappingProxyType({}))

    def is_valid_table(self, table_id: int) -> bool:
        return table_id in self.tables

    def is_valid_menu(self, menu_id: int) -> bool:
        return menu_id in self.menus

    def list_menus(self) -> list[Menu]:
        """Return every menu item ordered by id."""

        return [Menu(id=menu_id, name=self.menus[menu_id]) for menu_id in sorted(self.menus)]


def build_catalog(num_tables: int, menu_names: Iterable[str] = SEED_MENUS) -> Catalog:
    """Return a catalog with tables ``1..num_tables`` and numbered menu items.

    Menu ids start at 1 and follow the order of ``menu_names``.
    """

    menus = {i: name for i, name in enumerate(menu_names, start=1)}
    return Catalog(
        tables=frozenset(range(1, num_tables + 1)),
        menus=MappingProxyType(menus),
    )
