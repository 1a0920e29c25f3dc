from django.contrib import admin

from .models import Project, ProjectWorkCode, WorkCode


class ProjectWorkCodeInline(admin.TabularInline):
    model = ProjectWorkCode
    extra = 1


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ("number", "name", "status", "progress_percentage")
    list_filter = ("status",)
    search_fields = ("number", "name")
    inlines = [ProjectWorkCodeInline]


@admin.register(WorkCode)
class WorkCodeAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "is_active", "sort_order")
    list_filter = ("is_active",)
    search_fields = ("code", "name")
