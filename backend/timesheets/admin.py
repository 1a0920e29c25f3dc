from django.contrib import admin
from .models import TimeRegistration

@admin.register(TimeRegistration)
class TimeRegistrationAdmin(admin.ModelAdmin):
    list_display = ("date", "user", "project_name", "work_code", "hours", "status")
    list_filter = ("status", "project")
    search_fields = ("project_name", "description", "work_code")
