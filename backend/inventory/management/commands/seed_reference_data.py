from django.conf import settings
from django.core.management.base import BaseCommand
from django.db import transaction

from inventory.constants import FALLBACK_WORK_CODE_NAME, MATERIAL_GROUPS
from inventory.models import MaterialGroup
from projects.models import WorkCode


class Command(BaseCommand):
    help = "Legt de standaard materiaalgroepen en de terugvalcode (999) aan."

    @transaction.atomic
    def handle(self, *args, **opts):
        created = 0
        for code, name, description in MATERIAL_GROUPS:
            _, was_created = MaterialGroup.objects.get_or_create(
                code=code, defaults={"name": name, "description": description},
            )
            created += int(was_created)
        self.stdout.write(self.style.SUCCESS(
            f"Materiaalgroepen: {created} aangemaakt, {len(MATERIAL_GROUPS) - created} bestonden al."
        ))

        fallback = settings.BACKOFFICE["FALLBACK_WORK_CODE"]
        _, was_created = WorkCode.objects.get_or_create(
            code=fallback, defaults={"name": FALLBACK_WORK_CODE_NAME, "sort_order": 999},
        )
        if was_created:
            self.stdout.write(self.style.SUCCESS(f"Bewakingscode {fallback} aangemaakt."))
        else:
            self.stdout.write(f"Bewakingscode {fallback} bestond al.")
