from rest_framework import serializers

from projects.models import Project
from projects.resolution import find_available_code

from .models import TimeRegistration


class TimeRegistrationSerializer(serializers.ModelSerializer):
    user_name = serializers.CharField(source="user.username", read_only=True)

    class Meta:
        model = TimeRegistration
        fields = "__all__"
        read_only_fields = ("user", "project", "project_name", "work_code_name", "status", "materials", "created_at")

    def validate_hours(self, value):
        if value <= 0:
            raise serializers.ValidationError("Aantal uren moet groter zijn dan 0")
        if value > 24:
            raise serializers.ValidationError("Aantal uren kan niet meer dan 24 zijn")
        return value

    def validate_progress_percentage(self, value):
        if value is not None and value > 100:
            raise serializers.ValidationError("Voortgang moet tussen 0 en 100 liggen")
        return value

    def validate(self, attrs):
        code = attrs.get("work_code")
        if code and self.instance is not None and code != self.instance.work_code:
            available = find_available_code(self.instance.project_id, code)
            if available is None:
                raise serializers.ValidationError({"work_code": f"Bewakingscode {code} is niet beschikbaar voor dit project"})
            attrs["work_code_name"] = available.name
        return attrs


class SubmitRegistrationSerializer(serializers.Serializer):
    # required checks happen in submit_registration so the messages match the form
    project = serializers.PrimaryKeyRelatedField(queryset=Project.objects.all(), required=False, allow_null=True)
    date = serializers.DateField(required=False, allow_null=True)
    kilometers = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    progress = serializers.IntegerField(required=False, allow_null=True)
    lines = serializers.ListField(child=serializers.DictField(), allow_empty=True)
