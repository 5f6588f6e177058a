"""Part class and inventory summary."""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional


class Part:
    """A spare part held in the maintenance inventory."""

    def __init__(
            self,
            id: str,
            name: str,
            part_number: str,
            category: str,
            quantity: int = 0,
            min_quantity: int = 0,
            unit_cost: float = 0.0,
            supplier: Optional[str] = None,
            location: Optional[str] = None,
            last_restocked: Optional[date] = None,
            used_in: Optional[List[str]] = None,
    ):
        self.id = id
        self.name = name
        self.part_number = part_number
        self.category = category
        self.quantity = quantity or 0
        self.min_quantity = min_quantity or 0
        self.unit_cost = unit_cost or 0.0
        self.supplier = supplier
        self.location = location
        self.last_restocked = last_restocked
        self.used_in = used_in or []

    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= self.min_quantity

    @property
    def stock_value(self) -> float:
        return self.quantity * self.unit_cost

    @property
    def restock_quantity(self) -> int:
        """Suggested restock target: twice the minimum."""
        return self.min_quantity * 2


@dataclass
class InventorySummary:
    low_stock: List[Part]
    total_value: float
    total_units: int
    part_count: int


def summarize_inventory(parts: Iterable[Part]) -> InventorySummary:
    parts = list(parts)
    return InventorySummary(
        low_stock=[p for p in parts if p.is_low_stock],
        total_value=sum(p.stock_value for p in parts),
        total_units=sum(p.quantity for p in parts),
        part_count=len(parts),
    )
