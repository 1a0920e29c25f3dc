from django.contrib import admin
from .models import Notification

@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("created_at", "recipient", "type", "title", "status")
    list_filter = ("type", "status")
    search_fields = ("title", "message")
