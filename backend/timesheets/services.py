import dataclasses
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from django.core.exceptions import ValidationError
from django.db import transaction

from inventory.booking import BookingLine, BookingResult, book_out
from inventory.models import Location, Product
from inventory.utils import to_decimal
from projects.models import Project
from projects.resolution import resolve_available_codes

from .materials import ProductMaterial, WorkLine, parse_work_line
from .models import TimeRegistration

log = logging.getLogger(__name__)

MAX_HOURS = Decimal("24")


@dataclass
class SubmissionResult:
    registrations: List[TimeRegistration] = field(default_factory=list)
    booking: Optional[BookingResult] = None

    @property
    def warnings(self):
        return self.booking.warnings if self.booking else []


def validate_work_lines(lines: List[WorkLine]):
    if not lines:
        raise ValidationError("Voeg minimaal 1 werkregel toe")
    for i, line in enumerate(lines, start=1):
        if not line.work_code or not line.description or not line.hours:
            raise ValidationError(f"Vul alle velden in voor werkregel {i}")
        if line.hours <= 0:
            raise ValidationError(f"Aantal uren moet groter zijn dan 0 voor werkregel {i}")
        if line.hours > MAX_HOURS:
            raise ValidationError(f"Aantal uren kan niet meer dan 24 zijn voor werkregel {i}")
    if sum(line.hours for line in lines) > MAX_HOURS:
        raise ValidationError("Totaal aantal uren kan niet meer dan 24 uur per dag zijn")


def _parse_progress(progress) -> Optional[int]:
    if progress in (None, ""):
        return None
    try:
        value = int(progress)
    except (TypeError, ValueError):
        raise ValidationError("Voortgang moet tussen 0 en 100 liggen")
    if not 0 <= value <= 100:
        raise ValidationError("Voortgang moet tussen 0 en 100 liggen")
    return value


def _parse_kilometers(kilometers) -> Decimal:
    if kilometers in (None, ""):
        return Decimal("0")
    km = to_decimal(kilometers)
    if km is None or km < 0:
        raise ValidationError("Voer een geldig aantal kilometers in")
    return km


def _resolve_materials(line: WorkLine):
    """
    Fill in product names and units from the catalog and collect the stock
    bookings for product materials that were taken from a location.
    """
    product_ids = {m.product_id for m in line.materials if isinstance(m, ProductMaterial)}
    location_ids = {m.location_id for m in line.materials
                    if isinstance(m, ProductMaterial) and m.location_id is not None}
    products = Product.objects.in_bulk(product_ids)
    locations = Location.objects.in_bulk(location_ids)

    materials, bookings = [], []
    for m in line.materials:
        if isinstance(m, ProductMaterial):
            product = products.get(m.product_id)
            if product is None:
                raise ValidationError(f"Product {m.product_id} bestaat niet")
            m = dataclasses.replace(m, product_name=m.product_name or product.name, unit=m.unit or product.unit)
            if m.location_id is not None:
                location = locations.get(m.location_id)
                if location is None:
                    raise ValidationError(f"Locatie {m.location_id} bestaat niet")
                bookings.append(BookingLine(product=product, location=location, quantity=m.quantity))
        materials.append(m)
    return materials, bookings


def submit_registration(user, project: Optional[Project], date, work_lines, kilometers=None, progress=None) -> SubmissionResult:
    """
    Store a day's work for one project: one TimeRegistration per work line.

    Every work code must be selectable for the project. Product materials that
    name a location are booked out of stock against the project; shortfalls
    come back as warnings and do not stop the submission. A given progress
    only ever raises the project's progress.
    """
    if not date or project is None:
        raise ValidationError("Datum en project zijn verplicht")

    lines = [parse_work_line(raw) if isinstance(raw, dict) else raw for raw in work_lines or []]
    validate_work_lines(lines)

    codes = {c.code: c for c in resolve_available_codes(project)}
    for i, line in enumerate(lines, start=1):
        if line.work_code not in codes:
            raise ValidationError(f"Bewakingscode {line.work_code} is niet beschikbaar voor dit project (werkregel {i})")

    km = _parse_kilometers(kilometers)
    progress = _parse_progress(progress)

    prepared = []
    booking_lines = []
    for line in lines:
        materials, bookings = _resolve_materials(line)
        prepared.append((line, materials))
        booking_lines.extend(bookings)

    result = SubmissionResult()
    with transaction.atomic():
        for line, materials in prepared:
            result.registrations.append(TimeRegistration.objects.create(
                user=user,
                project=project,
                project_name=project.name,
                date=date,
                work_code=line.work_code,
                work_code_name=codes[line.work_code].name,
                hours=line.hours,
                description=line.description,
                driven_kilometers=km,
                progress_percentage=progress,
                materials=[m.as_dict() for m in materials],
            ))

        if booking_lines:
            result.booking = book_out(booking_lines, user, project=project, note=f"Urenregistratie {date}")

        if progress is not None:
            raised = (Project.objects
                      .filter(pk=project.pk, progress_percentage__lt=progress)
                      .update(progress_percentage=progress))
            if raised:
                project.progress_percentage = progress
                log.info("Project %s progress raised to %s%%", project.pk, progress)

    log.info(
        "User %s registered %s hour(s) on project %s in %d line(s)",
        getattr(user, "pk", None), sum(l.hours for l in lines), project.pk, len(lines),
    )
    return result
