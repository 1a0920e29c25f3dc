"""
Which bewakingscodes may be used for the hours of a project.

A project without ProjectWorkCode rows is unrestricted and offers every active
global code. A restricted project offers its linked global codes plus its own
custom codes, and always the fallback code ("999", "niet gespecificeerd") as
long as the global catalog has one.
"""
import logging
from dataclasses import asdict, dataclass
from typing import List, Optional

from django.conf import settings
from django.core.cache import cache
from django.core.exceptions import ValidationError
from django.db import transaction

from .models import Project, ProjectWorkCode, WorkCode

log = logging.getLogger(__name__)

CACHE_KEY = "projects:active-work-codes"


@dataclass(frozen=True)
class AvailableCode:
    code: str
    name: str
    description: str = ""
    is_custom: bool = False
    work_code_id: Optional[int] = None

    @classmethod
    def from_work_code(cls, wc: WorkCode) -> "AvailableCode":
        return cls(code=wc.code, name=wc.name, description=wc.description or "", work_code_id=wc.pk)

    @classmethod
    def from_link(cls, link: ProjectWorkCode) -> "AvailableCode":
        if link.is_custom:
            return cls(
                code=link.custom_code,
                name=link.custom_name,
                description=link.custom_description or "",
                is_custom=True,
            )
        return cls.from_work_code(link.work_code)

    def as_dict(self):
        return asdict(self)


# ------------------- Global catalog -------------------

def active_work_codes() -> List[AvailableCode]:
    """All active global codes in sort order. Cached, the catalog rarely changes."""
    codes = cache.get(CACHE_KEY)
    if codes is None:
        codes = [
            AvailableCode.from_work_code(wc)
            for wc in WorkCode.objects.filter(is_active=True).order_by("sort_order", "code")
        ]
        cache.set(CACHE_KEY, codes, settings.BACKOFFICE["WORK_CODE_CACHE_SECONDS"])
    return list(codes)


def invalidate_work_code_cache():
    cache.delete(CACHE_KEY)


# ------------------- Resolution -------------------

def resolve_available_codes(project) -> List[AvailableCode]:
    """
    Codes selectable for a time entry on `project` (instance, id or None),
    sorted by code.
    """
    catalog = active_work_codes()
    project_id = project.pk if isinstance(project, Project) else project
    if project_id is None:
        return sorted(catalog, key=lambda c: c.code)

    links = list(
        ProjectWorkCode.objects
        .filter(project_id=project_id)
        .select_related("work_code")
        .order_by("id")
    )
    if not links:
        return sorted(catalog, key=lambda c: c.code)

    codes = [AvailableCode.from_link(link) for link in links]

    fallback = settings.BACKOFFICE["FALLBACK_WORK_CODE"]
    if not any(c.code == fallback for c in codes):
        extra = next((c for c in catalog if c.code == fallback), None)
        if extra is not None:
            codes.append(extra)
        else:
            log.debug("Fallback code %s not in catalog, project %s has none", fallback, project_id)

    return sorted(codes, key=lambda c: c.code)


def find_available_code(project, code: str) -> Optional[AvailableCode]:
    return next((c for c in resolve_available_codes(project) if c.code == code), None)


# ------------------- Project administration -------------------

@transaction.atomic
def toggle_work_code(project: Project, work_code: WorkCode) -> bool:
    """Link or unlink a global code. Returns True when the code is linked afterwards."""
    deleted, _ = ProjectWorkCode.objects.filter(project=project, work_code=work_code).delete()
    if deleted:
        log.info("Project %s: code %s removed", project.pk, work_code.code)
        return False
    ProjectWorkCode.objects.create(project=project, work_code=work_code)
    log.info("Project %s: code %s added", project.pk, work_code.code)
    return True


def add_custom_code(project: Project, code: str, name: str, description: Optional[str] = None) -> ProjectWorkCode:
    code = (code or "").strip()
    name = (name or "").strip()
    if not code or not name:
        raise ValidationError("Code en naam zijn verplicht")
    if ProjectWorkCode.objects.filter(project=project, custom_code=code).exists():
        raise ValidationError("Deze code bestaat al voor dit project")
    link = ProjectWorkCode.objects.create(
        project=project,
        custom_code=code,
        custom_name=name,
        custom_description=(description or "").strip(),
    )
    log.info("Project %s: custom code %s added", project.pk, code)
    return link


def remove_project_work_code(link: ProjectWorkCode):
    log.info("Project %s: link %s removed", link.project_id, link.pk)
    link.delete()
