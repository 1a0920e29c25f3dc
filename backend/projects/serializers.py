from rest_framework import serializers

from .models import Project, ProjectWorkCode, WorkCode


class ProjectSerializer(serializers.ModelSerializer):
    class Meta:
        model = Project
        fields = "__all__"
        read_only_fields = ("created_by", "created_at")


class WorkCodeSerializer(serializers.ModelSerializer):
    class Meta:
        model = WorkCode
        fields = "__all__"


class ProjectWorkCodeSerializer(serializers.ModelSerializer):
    work_code = WorkCodeSerializer(read_only=True)
    is_custom = serializers.BooleanField(read_only=True)

    class Meta:
        model = ProjectWorkCode
        fields = ("id", "project", "work_code", "custom_code", "custom_name", "custom_description", "is_custom")
        read_only_fields = fields


class CustomCodeSerializer(serializers.Serializer):
    code = serializers.CharField(allow_blank=True)
    name = serializers.CharField(allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class ToggleCodeSerializer(serializers.Serializer):
    work_code = serializers.PrimaryKeyRelatedField(queryset=WorkCode.objects.all())
