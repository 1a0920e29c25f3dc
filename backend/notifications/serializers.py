from rest_framework import serializers
from .models import Notification


class NotificationSerializer(serializers.ModelSerializer):
    sender_name = serializers.CharField(source="sender.username", read_only=True, default=None)
    class Meta:
        model = Notification
        fields = "__all__"
        read_only_fields = ("recipient", "sender", "type", "title", "message", "created_at")
