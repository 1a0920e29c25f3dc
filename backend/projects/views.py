from django.shortcuts import get_object_or_404
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import api_view, permission_classes

from accounts.permissions import IsOfficeStaff, IsOfficeStaffOrReadOnly
from inventory.utils import respond

from .models import Project, ProjectWorkCode, WorkCode
from .resolution import add_custom_code, remove_project_work_code, resolve_available_codes, toggle_work_code
from .serializers import (
    CustomCodeSerializer, ProjectSerializer, ProjectWorkCodeSerializer,
    ToggleCodeSerializer, WorkCodeSerializer,
)


# ------------------- ViewSets (CRUD) -------------------

class ProjectViewSet(viewsets.ModelViewSet):
    serializer_class = ProjectSerializer
    permission_classes = [IsOfficeStaffOrReadOnly]

    def get_queryset(self):
        qs = Project.objects.all().order_by("name")
        state = self.request.query_params.get("status")
        if state:
            qs = qs.filter(status=state)
        return qs

    def perform_create(self, serializer):
        serializer.save(created_by=self.request.user)


class WorkCodeViewSet(viewsets.ModelViewSet):
    queryset = WorkCode.objects.all().order_by("sort_order", "code")
    serializer_class = WorkCodeSerializer
    permission_classes = [IsOfficeStaffOrReadOnly]


class ProjectWorkCodeViewSet(mixins.ListModelMixin,
                             mixins.RetrieveModelMixin,
                             mixins.DestroyModelMixin,
                             viewsets.GenericViewSet):
    serializer_class = ProjectWorkCodeSerializer
    permission_classes = [IsOfficeStaffOrReadOnly]

    def get_queryset(self):
        qs = ProjectWorkCode.objects.select_related("work_code").order_by("id")
        project_id = self.request.query_params.get("project")
        if project_id:
            qs = qs.filter(project_id=project_id)
        return qs

    def perform_destroy(self, instance):
        remove_project_work_code(instance)


# ------------------- Work-code resolution -------------------

@api_view(["GET"])
def available_codes(request, project_id):
    """
    GET /api/projects/<id>/work-codes/
    Codes the time-entry form offers for this project, sorted by code.
    """
    project = get_object_or_404(Project, pk=project_id)
    codes = resolve_available_codes(project)
    restricted = ProjectWorkCode.objects.filter(project=project).exists()
    return respond(
        {"codes": [c.as_dict() for c in codes], "restricted": restricted},
        f"{len(codes)} bewakingscodes beschikbaar.",
    )


@api_view(["POST"])
@permission_classes([IsOfficeStaff])
def toggle_code(request, project_id):
    """
    POST /api/projects/<id>/work-codes/toggle/
    Body: { "work_code": 3 }
    """
    project = get_object_or_404(Project, pk=project_id)
    ser = ToggleCodeSerializer(data=request.data)
    ser.is_valid(raise_exception=True)
    wc = ser.validated_data["work_code"]
    linked = toggle_work_code(project, wc)
    msg = f"Code {wc.code} toegevoegd." if linked else f"Code {wc.code} verwijderd."
    return respond({"status": "ok", "linked": linked, "code": wc.code}, msg)


@api_view(["POST"])
@permission_classes([IsOfficeStaff])
def add_custom(request, project_id):
    """
    POST /api/projects/<id>/work-codes/custom/
    Body: { "code": "R01", "name": "Ruimte 1", "description": "..."? }
    """
    project = get_object_or_404(Project, pk=project_id)
    ser = CustomCodeSerializer(data=request.data)
    ser.is_valid(raise_exception=True)
    link = add_custom_code(project, **ser.validated_data)
    return respond(
        ProjectWorkCodeSerializer(link).data,
        f"Code {link.custom_code} toegevoegd.",
        http_status=status.HTTP_201_CREATED,
    )
