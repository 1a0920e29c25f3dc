from django.conf import settings
from django.db import models


class Profile(models.Model):
    ADMIN = "admin"
    OFFICE = "kantoorpersoneel"
    SUPERUSER = "superuser"
    EMPLOYEE = "medewerker"
    ROLES = (
        (ADMIN, "Admin"),
        (OFFICE, "Kantoorpersoneel"),
        (SUPERUSER, "Superuser"),
        (EMPLOYEE, "Medewerker"),
    )

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="profile")
    name = models.CharField(max_length=200, blank=True)
    role = models.CharField(max_length=20, choices=ROLES, default=EMPLOYEE)

    def __str__(self): return f"{self.display_name} ({self.role})"

    @property
    def display_name(self):
        return self.name or self.user.get_full_name() or self.user.get_username()
