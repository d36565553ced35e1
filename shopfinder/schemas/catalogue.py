from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Shopkeepers pick "none" from the measure dropdown to mean "no unit"
NO_MEASURE = "none"


class Coordinate(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: Optional[float] = None
    # Height is shown to players but never used for distance
    y: Optional[float] = None
    z: Optional[float] = None

    def display(self) -> str:
        return f"({_fmt(self.x)}, {_fmt(self.y)}, {_fmt(self.z)})"


def _fmt(value: Optional[float]) -> str:
    if value is None:
        return "?"
    if float(value).is_integer():
        return str(int(value))
    return str(value)


class Item(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    price: float = Field(ge=0, allow_inf_nan=False, description="Total price for the listed quantity")
    quantity: Optional[int] = Field(default=None, ge=0)
    measure: Optional[str] = None

    @property
    def effective_quantity(self) -> int:
        """Quantity used for unit pricing; missing or zero counts as one."""
        return self.quantity or 1

    @property
    def unit_label(self) -> Optional[str]:
        if not self.measure or self.measure == NO_MEASURE:
            return None
        return self.measure

    @property
    def display_quantity(self) -> Optional[str]:
        """``"64 cs"`` style label, or ``None`` when the item has no unit."""
        if self.unit_label is None:
            return None
        return f"{self.effective_quantity} {self.unit_label}"


class ShopItemInput(BaseModel):
    """One row of the shopkeeper price list editor.

    Stricter than ``Item``: every field must be filled in and the measure
    must come from the dropdown. Catalogue files are still read with ``Item``.
    """

    name: str = Field(min_length=1)
    quantity: int = Field(ge=1)
    measure: Literal["none", "ci", "cs"]
    price: float = Field(ge=0, allow_inf_nan=False)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        name = value.strip()
        if not name:
            raise ValueError("Item name cannot be blank")
        return name

    def to_item(self) -> Item:
        return Item(name=self.name, price=self.price, quantity=self.quantity, measure=self.measure)


class Shop(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    coordinates: Optional[Coordinate] = None
    rating: float = Field(default=0.0, ge=0, le=5, allow_inf_nan=False)
    items: list[Item] = Field(default_factory=list)


class ShopOverride(BaseModel):
    """Partial shop record saved by a shopkeeper.

    Only fields that were explicitly provided take part in a merge, so an
    override carrying just ``items`` leaves the base coordinates and rating
    alone.
    """

    coordinates: Optional[Coordinate] = None
    rating: Optional[float] = Field(default=None, ge=0, le=5, allow_inf_nan=False)
    items: Optional[list[Item]] = None

    def set_fields(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)


__all__ = ["NO_MEASURE", "Coordinate", "Item", "Shop", "ShopItemInput", "ShopOverride"]
