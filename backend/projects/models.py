from django.conf import settings
from django.db import models
from django.db.models import Q


class Project(models.Model):
    ACTIVE = "actief"
    STATUSES = (
        ("gepland", "Gepland"),
        (ACTIVE, "Actief"),
        ("afgerond", "Afgerond"),
    )

    name = models.CharField(max_length=200)
    number = models.CharField(max_length=50, blank=True)
    description = models.TextField(blank=True)
    status = models.CharField(max_length=20, choices=STATUSES, default=ACTIVE)
    progress_percentage = models.PositiveSmallIntegerField(default=0)
    start_date = models.DateField(null=True, blank=True)
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ("name",)

    def __str__(self): return f"{self.number} {self.name}".strip()


class WorkCode(models.Model):
    """Bewakingscode: categorises the hours of a time registration."""
    code = models.CharField(max_length=20, unique=True)
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    is_active = models.BooleanField(default=True)
    sort_order = models.IntegerField(default=0)

    class Meta:
        ordering = ("sort_order", "code")

    def __str__(self): return f"{self.code} - {self.name}"


class ProjectWorkCode(models.Model):
    """
    Restricts the codes of a project. A row links either a global WorkCode or
    carries a project-local custom code, never both. A project without rows
    may use every active global code.
    """
    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name="work_code_links")
    work_code = models.ForeignKey(WorkCode, on_delete=models.CASCADE, null=True, blank=True, related_name="project_links")
    custom_code = models.CharField(max_length=20, null=True, blank=True)
    custom_name = models.CharField(max_length=200, blank=True)
    custom_description = models.TextField(blank=True)

    class Meta:
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(work_code__isnull=False, custom_code__isnull=True)
                    | Q(work_code__isnull=True, custom_code__isnull=False)
                ),
                name="projectworkcode_exactly_one_source",
            ),
            models.UniqueConstraint(fields=("project", "work_code"), name="projectworkcode_unique_standard"),
            models.UniqueConstraint(fields=("project", "custom_code"), name="projectworkcode_unique_custom"),
        ]

    @property
    def is_custom(self):
        return self.work_code_id is None

    def __str__(self):
        code = self.custom_code if self.is_custom else self.work_code.code
        return f"{self.project_id}: {code}"
