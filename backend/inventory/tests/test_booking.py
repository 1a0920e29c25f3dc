import logging
from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError

from inventory.booking import (
    BookingLine, book_out, delete_transaction, edit_transaction, low_stock_alerts,
    move_stock, receive_stock, relocate_stock, set_stock_quantity,
)
from inventory.models import InventoryTransaction, StockEntry
from inventory.signals import stock_warning_raised

pytestmark = pytest.mark.django_db


@pytest.fixture
def screw(make_product):
    return make_product("Kozijnschroef 7.5x212", sku="KZS-75212", unit="stuks", minimum_stock=20)


@pytest.fixture
def foam(make_product):
    return make_product("Pistoolschuim", sku="PUR-750", unit="bus")


# ------------------- book_out -------------------

def test_booking_more_than_available_goes_negative_and_warns(screw, warehouse, project, employee, set_stock, stock_of):
    set_stock(screw, warehouse, 5)

    result = book_out([BookingLine(screw, warehouse, 8)], employee, project=project, note="Klant Jansen")

    assert stock_of(screw, warehouse) == Decimal("-3")
    assert len(result.warnings) == 1
    w = result.warnings[0]
    assert (w.available, w.requested) == (Decimal("5"), Decimal("8"))
    assert w.product_name == "Kozijnschroef 7.5x212"
    assert w.location_name == "Magazijn"

    tx = InventoryTransaction.objects.get()
    assert result.transaction_ids == [tx.pk]
    assert tx.quantity == Decimal("-8")
    assert tx.transaction_type == InventoryTransaction.OUT
    assert tx.project == project
    assert tx.user == employee
    assert tx.notes == "Klant Jansen"


def test_booking_within_stock_has_no_warnings(screw, foam, warehouse, van, employee, set_stock, stock_of):
    set_stock(screw, warehouse, 10)
    set_stock(foam, van, 4)

    result = book_out([BookingLine(screw, warehouse, 3), BookingLine(foam, van, "1,5")], employee)

    assert result.warnings == []
    assert len(result.transaction_ids) == 2
    assert stock_of(screw, warehouse) == Decimal("7")
    assert stock_of(foam, van) == Decimal("2.5")


def test_booking_without_stock_row_creates_a_negative_row(screw, van, employee, stock_of):
    result = book_out([BookingLine(screw, van, 2)], employee)

    assert stock_of(screw, van) == Decimal("-2")
    assert result.warnings[0].available == Decimal("0")


def test_booking_to_exactly_zero_keeps_the_row(screw, warehouse, employee, set_stock, stock_of):
    set_stock(screw, warehouse, 4)
    result = book_out([BookingLine(screw, warehouse, 4)], employee)
    assert result.warnings == []
    assert stock_of(screw, warehouse) == Decimal("0")


def test_same_product_twice_in_one_booking_deducts_both(screw, warehouse, employee, set_stock, stock_of):
    set_stock(screw, warehouse, 10)
    result = book_out([BookingLine(screw, warehouse, 6), BookingLine(screw, warehouse, 6)], employee)

    assert stock_of(screw, warehouse) == Decimal("-2")
    assert len(result.warnings) == 1
    assert result.warnings[0].available == Decimal("4")


def test_incomplete_lines_are_dropped(screw, warehouse, employee, set_stock, stock_of):
    set_stock(screw, warehouse, 10)
    lines = [
        BookingLine(screw, warehouse, 2),
        BookingLine(None, warehouse, 5),
        BookingLine(screw, None, 5),
        BookingLine(screw, warehouse, 0),
        BookingLine(screw, warehouse, "abc"),
    ]
    result = book_out(lines, employee)

    assert len(result.transaction_ids) == 1
    assert stock_of(screw, warehouse) == Decimal("8")


def test_no_valid_lines_writes_nothing(screw, warehouse, employee, set_stock, stock_of):
    set_stock(screw, warehouse, 10)

    with pytest.raises(ValidationError) as exc:
        book_out([BookingLine(screw, warehouse, 0), BookingLine(None, None, None)], employee)

    assert "Voeg minimaal 1 product toe" in exc.value.messages[0]
    assert InventoryTransaction.objects.count() == 0
    assert stock_of(screw, warehouse) == Decimal("10")


def test_warning_signal_carries_all_short_lines(screw, foam, warehouse, employee, project):
    received = []

    def listener(sender, warnings, actor, project, **kwargs):
        received.append((warnings, actor, project))

    stock_warning_raised.connect(listener, weak=False)
    try:
        book_out([BookingLine(screw, warehouse, 1), BookingLine(foam, warehouse, 2)], employee, project=project)
    finally:
        stock_warning_raised.disconnect(listener)

    assert len(received) == 1
    warnings, actor, proj = received[0]
    assert [w.product_id for w in warnings] == [screw.pk, foam.pk]
    assert actor == employee
    assert proj == project


def test_no_signal_without_shortfall(screw, warehouse, employee, set_stock):
    set_stock(screw, warehouse, 10)
    received = []

    def listener(sender, **kwargs):
        received.append(kwargs)

    stock_warning_raised.connect(listener, weak=False)
    try:
        book_out([BookingLine(screw, warehouse, 1)], employee)
    finally:
        stock_warning_raised.disconnect(listener)

    assert received == []


def test_failing_notification_does_not_undo_the_booking(screw, warehouse, employee, stock_of, caplog):
    def broken(sender, **kwargs):
        raise RuntimeError("mail server down")

    stock_warning_raised.connect(broken, weak=False)
    try:
        with caplog.at_level(logging.ERROR, logger="inventory.booking"):
            result = book_out([BookingLine(screw, warehouse, 3)], employee)
    finally:
        stock_warning_raised.disconnect(broken)

    assert len(result.warnings) == 1
    assert stock_of(screw, warehouse) == Decimal("-3")
    assert InventoryTransaction.objects.count() == 1
    assert "mail server down" in caplog.text


# ------------------- move / relocate -------------------

def test_moving_everything_removes_the_source_row(screw, warehouse, van, set_stock, stock_of):
    set_stock(screw, warehouse, 10)

    remaining, target = move_stock(screw, warehouse, van, 10)

    assert remaining == Decimal("0")
    assert stock_of(screw, warehouse) is None
    assert target.quantity == Decimal("10")
    assert stock_of(screw, van) == Decimal("10")


def test_partial_move_increments_existing_target(screw, warehouse, van, set_stock, stock_of):
    set_stock(screw, warehouse, 10)
    set_stock(screw, van, 2)

    remaining, _ = move_stock(screw, warehouse, van, "4")

    assert remaining == Decimal("6")
    assert stock_of(screw, warehouse) == Decimal("6")
    assert stock_of(screw, van) == Decimal("6")


@pytest.mark.parametrize("quantity", [0, -1, 11, "x"])
def test_invalid_move_changes_nothing(screw, warehouse, van, set_stock, stock_of, quantity):
    set_stock(screw, warehouse, 10)

    with pytest.raises(ValidationError):
        move_stock(screw, warehouse, van, quantity)

    assert stock_of(screw, warehouse) == Decimal("10")
    assert stock_of(screw, van) is None


def test_move_to_the_same_location_is_rejected(screw, warehouse, set_stock):
    set_stock(screw, warehouse, 10)
    with pytest.raises(ValidationError):
        move_stock(screw, warehouse, warehouse, 1)


def test_relocate_moves_whole_rows_and_skips_the_rest(screw, foam, warehouse, van, make_location, set_stock, stock_of):
    site = make_location("Bouwkeet")
    set_stock(screw, warehouse, 10)
    set_stock(foam, van, 3)
    set_stock(screw, site, 1)

    moved = relocate_stock([(screw, warehouse), (foam, van), (screw, site), (foam, warehouse)], site)

    assert moved == 2
    assert stock_of(screw, warehouse) is None
    assert stock_of(foam, van) is None
    assert stock_of(screw, site) == Decimal("11")
    assert stock_of(foam, site) == Decimal("3")


# ------------------- receive / corrections -------------------

def test_receive_writes_an_in_transaction(screw, warehouse, office_user, set_stock, stock_of):
    set_stock(screw, warehouse, 2)

    tx, entry = receive_stock(screw, warehouse, 25, office_user, note="Levering 12-03")

    assert tx.transaction_type == InventoryTransaction.IN
    assert tx.quantity == Decimal("25")
    assert entry.quantity == Decimal("27")
    assert stock_of(screw, warehouse) == Decimal("27")


def test_receive_rejects_non_positive_quantity(screw, warehouse, office_user):
    with pytest.raises(ValidationError):
        receive_stock(screw, warehouse, 0, office_user)
    assert InventoryTransaction.objects.count() == 0


def test_set_stock_quantity_updates_or_creates(screw, warehouse, van, set_stock, stock_of):
    set_stock(screw, warehouse, -4)

    set_stock_quantity(screw, warehouse, 12)
    set_stock_quantity(screw, van, "3,5")

    assert stock_of(screw, warehouse) == Decimal("12")
    assert stock_of(screw, van) == Decimal("3.5")
    with pytest.raises(ValidationError):
        set_stock_quantity(screw, van, -1)


def test_low_stock_alerts_compare_with_minimum(screw, foam, warehouse, van, set_stock):
    set_stock(screw, warehouse, 5)     # minimum 20
    set_stock(screw, van, 25)
    set_stock(foam, warehouse, 0)      # minimum 0

    rows = list(low_stock_alerts())

    assert [(r.product.sku, r.location.name) for r in rows] == [("KZS-75212", "Magazijn")]


# ------------------- ledger maintenance -------------------

def test_editing_a_transaction_leaves_stock_alone(screw, foam, warehouse, employee, set_stock, stock_of):
    set_stock(screw, warehouse, 10)
    result = book_out([BookingLine(screw, warehouse, 4)], employee)
    tx = InventoryTransaction.objects.get(pk=result.transaction_ids[0])

    edit_transaction(tx, quantity="-6", notes="gecorrigeerd", product=foam)

    tx.refresh_from_db()
    assert tx.quantity == Decimal("-6")
    assert tx.product == foam
    assert tx.notes == "gecorrigeerd"
    assert stock_of(screw, warehouse) == Decimal("6")


def test_editing_unknown_fields_is_rejected(screw, warehouse, employee):
    result = book_out([BookingLine(screw, warehouse, 1)], employee)
    tx = InventoryTransaction.objects.get(pk=result.transaction_ids[0])
    with pytest.raises(ValidationError):
        edit_transaction(tx, transaction_type="in")


def test_deleting_a_transaction_leaves_stock_alone(screw, warehouse, employee, set_stock, stock_of):
    set_stock(screw, warehouse, 10)
    result = book_out([BookingLine(screw, warehouse, 4)], employee)

    delete_transaction(InventoryTransaction.objects.get(pk=result.transaction_ids[0]))

    assert InventoryTransaction.objects.count() == 0
    assert stock_of(screw, warehouse) == Decimal("6")
    assert StockEntry.objects.count() == 1
