from django.conf import settings
from django.db import models


class TimeRegistration(models.Model):
    """One work line of a submitted day: hours on one work code, with the materials used."""
    SUBMITTED = "submitted"

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="time_registrations")
    project = models.ForeignKey("projects.Project", on_delete=models.SET_NULL, null=True, blank=True,
                                related_name="time_registrations")
    project_name = models.CharField(max_length=200, blank=True)
    date = models.DateField()
    work_code = models.CharField(max_length=20)
    work_code_name = models.CharField(max_length=200, blank=True)
    hours = models.DecimalField(max_digits=5, decimal_places=2)
    description = models.TextField()
    driven_kilometers = models.DecimalField(max_digits=8, decimal_places=1, default=0)
    progress_percentage = models.PositiveSmallIntegerField(null=True, blank=True)
    status = models.CharField(max_length=20, default=SUBMITTED)
    materials = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    class Meta:
        ordering = ("-date", "-created_at", "-id")
    def __str__(self): return f"{self.date} {self.project_name} {self.work_code} {self.hours}u"
