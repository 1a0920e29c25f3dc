from decimal import Decimal
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from inventory.constants import MATERIAL_GROUPS
from inventory.models import InventoryTransaction, MaterialGroup
from projects.models import WorkCode

pytestmark = pytest.mark.django_db


def test_seed_reference_data_is_idempotent():
    call_command("seed_reference_data", stdout=StringIO())
    out = StringIO()
    call_command("seed_reference_data", stdout=out)

    assert MaterialGroup.objects.count() == len(MATERIAL_GROUPS)
    assert WorkCode.objects.get(code="999").name == "Niet gespecificeerd"
    assert "0 aangemaakt" in out.getvalue()


def test_import_location_stock(tmp_path, make_product, warehouse, set_stock, stock_of):
    screw = make_product("Kozijnschroef 7.5x212", sku="KZS-75212")
    foam = make_product("Pistoolschuim", sku="PUR-750")
    set_stock(screw, warehouse, 5)
    csv_file = tmp_path / "voorraad.csv"
    csv_file.write_text(
        "\ufeffSKU;Naam;Materiaal groep;Voorraad;Eenheid\n"
        "KZS-75212;Kozijnschroef 7.5x212;03;20;stuks\n"
        "PUR-750;Pistoolschuim;02;6;bus\n"
        "ONBEKEND;Iets;01;3;stuks\n"
        "PUR-750;Pistoolschuim;02;veel;bus\n"
        "\n",
        encoding="utf-8",
    )
    out = StringIO()

    call_command("import_location_stock", str(warehouse.pk), str(csv_file), stdout=out)

    assert stock_of(screw, warehouse) == Decimal("25")
    assert stock_of(foam, warehouse) == Decimal("6")
    assert "Succesvol: 2, fouten: 2" in out.getvalue()
    assert InventoryTransaction.objects.count() == 0


def test_import_by_location_name(tmp_path, make_product, warehouse, stock_of):
    screw = make_product("Kozijnschroef 7.5x212", sku="KZS-75212")
    csv_file = tmp_path / "voorraad.csv"
    csv_file.write_text("SKU;Naam;Groep;Voorraad\nKZS-75212;x;03;4\n", encoding="utf-8")

    call_command("import_location_stock", "Magazijn", str(csv_file), stdout=StringIO())

    assert stock_of(screw, warehouse) == Decimal("4")


def test_import_unknown_location_fails(tmp_path):
    csv_file = tmp_path / "voorraad.csv"
    csv_file.write_text("SKU;Naam;Groep;Voorraad\n", encoding="utf-8")
    with pytest.raises(CommandError):
        call_command("import_location_stock", "Nergens", str(csv_file), stdout=StringIO())
