"""
Work lines and the materials recorded on them.

A material is either a catalog product (optionally taken from a location, in
which case it is booked out of stock) or a free-text description for things
that are not in the catalog. Both are stored on the registration as plain
dicts with a `type` discriminator.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import ClassVar, List, Optional, Union

from django.core.exceptions import ValidationError

from inventory.utils import to_decimal


@dataclass(frozen=True)
class ProductMaterial:
    type: ClassVar[str] = "product"

    product_id: int
    product_name: str
    quantity: Decimal
    unit: str = ""
    location_id: Optional[int] = None

    def as_dict(self):
        d = {
            "type": self.type,
            "product_id": self.product_id,
            "product_name": self.product_name,
            "quantity": float(self.quantity),
            "unit": self.unit,
        }
        if self.location_id is not None:
            d["location_id"] = self.location_id
        return d


@dataclass(frozen=True)
class DescribedMaterial:
    type: ClassVar[str] = "description"

    description: str
    quantity: Decimal
    unit: str = ""

    def as_dict(self):
        return {
            "type": self.type,
            "description": self.description,
            "quantity": float(self.quantity),
            "unit": self.unit,
        }


MaterialLine = Union[ProductMaterial, DescribedMaterial]


def _int_or_none(value):
    if value in (None, ""):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Ongeldige verwijzing: {value}")


def parse_material(raw: dict) -> MaterialLine:
    kind = raw.get("type") or ("product" if raw.get("product_id") else "description")
    quantity = to_decimal(raw.get("quantity"))
    if quantity is None or quantity <= 0:
        raise ValidationError("Aantal moet groter zijn dan 0 voor elk materiaal")
    unit = (raw.get("unit") or "").strip()

    if kind == ProductMaterial.type:
        product_id = _int_or_none(raw.get("product_id"))
        if product_id is None:
            raise ValidationError("Selecteer een product voor elk materiaal")
        return ProductMaterial(
            product_id=product_id,
            product_name=(raw.get("product_name") or "").strip(),
            quantity=quantity,
            unit=unit,
            location_id=_int_or_none(raw.get("location_id")),
        )
    if kind == DescribedMaterial.type:
        description = (raw.get("description") or "").strip()
        if not description:
            raise ValidationError("Omschrijving is verplicht voor materiaal zonder product")
        return DescribedMaterial(description=description, quantity=quantity, unit=unit)

    raise ValidationError(f"Onbekend materiaaltype: {kind}")


@dataclass
class WorkLine:
    work_code: str
    description: str
    hours: Optional[Decimal]
    materials: List[MaterialLine] = field(default_factory=list)


def parse_work_line(raw: dict) -> WorkLine:
    return WorkLine(
        work_code=str(raw.get("work_code") or "").strip(),
        description=(raw.get("description") or "").strip(),
        hours=to_decimal(raw.get("hours")),
        materials=[parse_material(m) for m in (raw.get("materials") or [])],
    )
