from django.conf import settings
from django.db import models


class Notification(models.Model):
    UNREAD = "unread"
    READ = "read"
    ARCHIVED = "archived"
    STATUSES = ((UNREAD, "Ongelezen"), (READ, "Gelezen"), (ARCHIVED, "Gearchiveerd"))

    STOCK_WARNING = "stock_warning"

    recipient = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="notifications")
    sender = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
                               related_name="sent_notifications")
    type = models.CharField(max_length=50)
    title = models.CharField(max_length=200)
    message = models.TextField()
    status = models.CharField(max_length=20, choices=STATUSES, default=UNREAD)
    created_at = models.DateTimeField(auto_now_add=True)
    class Meta:
        ordering = ("-created_at", "-id")
    def __str__(self): return f"{self.type} -> {self.recipient_id}: {self.title}"
