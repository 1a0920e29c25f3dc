import csv

from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError

from inventory.booking import add_stock
from inventory.models import Location, Product


class Command(BaseCommand):
    help = (
        "Telt voorraad per SKU op bij een locatie vanuit een CSV-export "
        "(SKU in kolom 1, voorraad in kolom 4, eerste regel is de kop)."
    )

    def add_arguments(self, parser):
        parser.add_argument("location", help="Locatie-id of naam")
        parser.add_argument("csv_path")
        parser.add_argument("--delimiter", default=";")

    def handle(self, *args, **opts):
        location = self._location(opts["location"])

        try:
            fh = open(opts["csv_path"], newline="", encoding="utf-8-sig")
        except OSError as e:
            raise CommandError(f"Kan {opts['csv_path']} niet openen: {e}")

        ok = errors = 0
        with fh:
            rows = csv.reader(fh, delimiter=opts["delimiter"])
            next(rows, None)  # header
            for row in rows:
                if not row or not any(c.strip() for c in row):
                    continue
                sku = row[0].strip() if len(row) > 0 else ""
                quantity = row[3].strip() if len(row) > 3 else ""
                if not sku or not quantity:
                    continue

                product = Product.objects.filter(sku=sku).first()
                if product is None:
                    self.stdout.write(self.style.WARNING(f"Onbekende SKU: {sku}"))
                    errors += 1
                    continue
                try:
                    add_stock(product, location, quantity)
                except ValidationError:
                    self.stdout.write(self.style.WARNING(f"Ongeldig aantal voor {sku}: {quantity}"))
                    errors += 1
                    continue
                ok += 1

        self.stdout.write(self.style.SUCCESS(
            f"Import voltooid voor {location.name}. Succesvol: {ok}, fouten: {errors}"
        ))

    def _location(self, ref):
        qs = Location.objects.filter(pk=ref) if str(ref).isdigit() else Location.objects.filter(name=ref)
        location = qs.first()
        if location is None:
            raise CommandError(f"Locatie {ref} niet gevonden.")
        return location
