"""
Stock booking: material issue against a project, inbound receipts, moves
between locations and manual corrections.

Every operation that reads and then writes a StockEntry does so inside one
atomic block with the rows locked (`select_for_update`), so two bookings on the
same product and location cannot lose an update.

Booking out never blocks on insufficient stock. The shortfall becomes a
StockWarning, the stock row goes negative and office staff are notified
through the `stock_warning_raised` signal once the booking is committed.
"""
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, List, Optional

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import F

from .models import InventoryTransaction, Location, Product, StockEntry
from .signals import stock_warning_raised
from .utils import format_quantity, to_decimal

log = logging.getLogger(__name__)

ZERO = Decimal("0")


@dataclass
class BookingLine:
    product: Optional[Product]
    location: Optional[Location]
    quantity: object

    @property
    def amount(self) -> Optional[Decimal]:
        return to_decimal(self.quantity)

    def is_complete(self) -> bool:
        qty = self.amount
        return self.product is not None and self.location is not None and qty is not None and qty > 0


@dataclass(frozen=True)
class StockWarning:
    product_id: int
    product_name: str
    location_id: int
    location_name: str
    available: Decimal
    requested: Decimal
    unit: str = "stuks"

    def as_dict(self):
        return {
            "product_id": self.product_id,
            "product_name": self.product_name,
            "location_id": self.location_id,
            "location_name": self.location_name,
            "available": float(self.available),
            "requested": float(self.requested),
            "unit": self.unit,
        }

    def describe(self) -> str:
        return (
            f"- {self.product_name} op {self.location_name}: "
            f"beschikbaar {format_quantity(self.available)} {self.unit}, "
            f"gevraagd {format_quantity(self.requested)} {self.unit}"
        )


@dataclass
class BookingResult:
    transaction_ids: List[int] = field(default_factory=list)
    warnings: List[StockWarning] = field(default_factory=list)

    def as_dict(self):
        return {
            "transaction_ids": list(self.transaction_ids),
            "warnings": [w.as_dict() for w in self.warnings],
        }


def _locked_entry(product, location) -> Optional[StockEntry]:
    return (
        StockEntry.objects
        .select_for_update()
        .filter(product=product, location=location)
        .first()
    )


def _add_to_stock(product, location, delta: Decimal) -> StockEntry:
    """Increment (or decrement) a stock row, creating it when missing. Caller holds the transaction."""
    entry = _locked_entry(product, location)
    if entry is None:
        return StockEntry.objects.create(product=product, location=location, quantity=delta)
    entry.quantity = entry.quantity + delta
    entry.save(update_fields=["quantity", "updated_at"])
    return entry


# ------------------- Book out -------------------

def book_out(lines: Iterable[BookingLine], actor, project=None, note: Optional[str] = None) -> BookingResult:
    """
    Deduct every complete line from stock and write one `out` transaction per line.
    Incomplete lines are dropped; with nothing left a ValidationError is raised
    and nothing is written.
    """
    valid = [line for line in lines if line.is_complete()]
    if not valid:
        raise ValidationError("Voeg minimaal 1 product toe met locatie en aantal")

    result = BookingResult()
    with transaction.atomic():
        for line in valid:
            requested = line.amount
            entry = _locked_entry(line.product, line.location)
            available = entry.quantity if entry is not None else ZERO

            if requested > available:
                result.warnings.append(StockWarning(
                    product_id=line.product.pk,
                    product_name=line.product.name,
                    location_id=line.location.pk,
                    location_name=line.location.name,
                    available=available,
                    requested=requested,
                    unit=line.product.unit,
                ))

            tx = InventoryTransaction.objects.create(
                product=line.product,
                location=line.location,
                project=project,
                user=actor,
                quantity=-abs(requested),
                transaction_type=InventoryTransaction.OUT,
                notes=note or "",
            )
            result.transaction_ids.append(tx.pk)

            if entry is None:
                StockEntry.objects.create(product=line.product, location=line.location, quantity=available - requested)
            else:
                entry.quantity = available - requested
                entry.save(update_fields=["quantity", "updated_at"])

    log.info(
        "Booked out %d line(s) for project %s by %s",
        len(result.transaction_ids), getattr(project, "pk", None), getattr(actor, "pk", None),
    )
    if result.warnings:
        _announce_warnings(result.warnings, actor, project)
    return result


def _announce_warnings(warnings: List[StockWarning], actor, project):
    for w in warnings:
        log.warning(
            "Insufficient stock: %s at %s, available %s, requested %s",
            w.product_name, w.location_name, w.available, w.requested,
        )
    responses = stock_warning_raised.send_robust(sender=book_out, warnings=warnings, actor=actor, project=project)
    for receiver, response in responses:
        if isinstance(response, Exception):
            log.error("Stock warning receiver %r failed: %s", receiver, response, exc_info=response)


# ------------------- Receive -------------------

def receive_stock(product: Product, location: Location, quantity, actor, project=None, note: Optional[str] = None):
    qty = to_decimal(quantity)
    if qty is None or qty <= 0:
        raise ValidationError("Aantal moet groter zijn dan 0")

    with transaction.atomic():
        tx = InventoryTransaction.objects.create(
            product=product,
            location=location,
            project=project,
            user=actor,
            quantity=qty,
            transaction_type=InventoryTransaction.IN,
            notes=note or "",
        )
        entry = _add_to_stock(product, location, qty)

    log.info("Received %s %s of %s at %s", qty, product.unit, product.sku, location.name)
    return tx, entry


# ------------------- Move -------------------

def move_stock(product: Product, from_location: Location, to_location: Location, quantity):
    """
    Move part or all of a stock row to another location.
    Returns (source quantity afterwards, destination row). A source row that
    reaches zero is removed.
    """
    qty = to_decimal(quantity)
    if qty is None or qty <= 0:
        raise ValidationError("Aantal moet groter zijn dan 0")
    if from_location.pk == to_location.pk:
        raise ValidationError("Bron- en doellocatie moeten verschillen")

    with transaction.atomic():
        source = _locked_entry(product, from_location)
        available = source.quantity if source is not None else ZERO
        if qty > available:
            raise ValidationError(
                f"Er is maar {format_quantity(available)} {product.unit} beschikbaar op {from_location.name}"
            )

        remaining = available - qty
        if remaining <= 0:
            source.delete()
        else:
            source.quantity = remaining
            source.save(update_fields=["quantity", "updated_at"])

        target = _add_to_stock(product, to_location, qty)

    log.info("Moved %s %s of %s from %s to %s", qty, product.unit, product.sku, from_location.name, to_location.name)
    return max(remaining, ZERO), target


def relocate_stock(pairs, to_location: Location) -> int:
    """
    Move everything of the given (product, location) rows to `to_location`.
    Missing rows and rows already at the target are skipped. Returns the number
    of rows moved.
    """
    moved = 0
    with transaction.atomic():
        for product, location in pairs:
            if location.pk == to_location.pk:
                continue
            source = _locked_entry(product, location)
            if source is None:
                continue
            qty = source.quantity
            source.delete()
            _add_to_stock(product, to_location, qty)
            moved += 1

    log.info("Relocated %d stock row(s) to %s", moved, to_location.name)
    return moved


# ------------------- Corrections -------------------

def set_stock_quantity(product: Product, location: Location, quantity) -> StockEntry:
    qty = to_decimal(quantity)
    if qty is None or qty < 0:
        raise ValidationError("Voer een geldig aantal in")

    with transaction.atomic():
        entry = _locked_entry(product, location)
        if entry is None:
            entry = StockEntry.objects.create(product=product, location=location, quantity=qty)
        else:
            entry.quantity = qty
            entry.save(update_fields=["quantity", "updated_at"])

    log.info("Stock of %s at %s set to %s", product.sku, location.name, qty)
    return entry


def add_stock(product: Product, location: Location, quantity) -> StockEntry:
    """Add to a stock row without a ledger entry (bulk imports)."""
    qty = to_decimal(quantity)
    if qty is None:
        raise ValidationError("Voer een geldig aantal in")
    with transaction.atomic():
        return _add_to_stock(product, location, qty)


def low_stock_alerts():
    return (
        StockEntry.objects
        .filter(quantity__lt=F("product__minimum_stock"))
        .select_related("product", "location")
        .order_by("product__name", "location__name")
    )


# ------------------- Ledger maintenance -------------------

EDITABLE_FIELDS = ("product", "location", "project", "quantity", "notes")


def edit_transaction(tx: InventoryTransaction, **fields) -> InventoryTransaction:
    """
    Correct a ledger row in place. Stock rows are left as they are; a changed
    quantity here does not move stock.
    """
    unknown = set(fields) - set(EDITABLE_FIELDS)
    if unknown:
        raise ValidationError(f"Onbekende velden: {', '.join(sorted(unknown))}")

    if "quantity" in fields:
        qty = to_decimal(fields["quantity"])
        if qty is None:
            raise ValidationError("Voer een geldig aantal in")
        fields["quantity"] = qty
    if "notes" in fields:
        fields["notes"] = fields["notes"] or ""

    for name, value in fields.items():
        setattr(tx, name, value)
    tx.save()
    log.info("Transaction %s edited (%s), stock not reconciled", tx.pk, ", ".join(sorted(fields)))
    return tx


def delete_transaction(tx: InventoryTransaction):
    log.info("Transaction %s deleted, stock not reconciled", tx.pk)
    tx.delete()
