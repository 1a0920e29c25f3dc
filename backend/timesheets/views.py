import logging

from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated

from accounts.permissions import IsOwnerOrOfficeStaff, is_office
from inventory.utils import respond

from .models import TimeRegistration
from .serializers import SubmitRegistrationSerializer, TimeRegistrationSerializer
from .services import submit_registration

log = logging.getLogger(__name__)


class TimeRegistrationViewSet(viewsets.ModelViewSet):
    """
    Users see and change their own registrations; office staff see all.
    POST takes a whole day (several work lines) at once.
    """
    serializer_class = TimeRegistrationSerializer
    permission_classes = [IsAuthenticated, IsOwnerOrOfficeStaff]
    owner_field = "user"

    def get_queryset(self):
        qs = TimeRegistration.objects.select_related("user", "project").order_by("-date", "-created_at", "-id")
        if not is_office(self.request.user):
            qs = qs.filter(user=self.request.user)
        elif self.request.query_params.get("user"):
            qs = qs.filter(user_id=self.request.query_params["user"])
        params = self.request.query_params
        if params.get("project"):
            qs = qs.filter(project_id=params["project"])
        if params.get("date_from"):
            qs = qs.filter(date__gte=params["date_from"])
        if params.get("date_to"):
            qs = qs.filter(date__lte=params["date_to"])
        return qs

    def create(self, request, *args, **kwargs):
        ser = SubmitRegistrationSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        d = ser.validated_data
        result = submit_registration(
            request.user,
            d.get("project"),
            d.get("date"),
            d["lines"],
            kilometers=d.get("kilometers"),
            progress=d.get("progress"),
        )

        msg = "Registratie opgeslagen."
        if result.warnings:
            msg += f" Let op: onvoldoende voorraad voor {len(result.warnings)} materiaal(en)."
        return respond(
            {
                "registrations": TimeRegistrationSerializer(result.registrations, many=True).data,
                "booking": result.booking.as_dict() if result.booking else None,
            },
            msg,
            http_status=status.HTTP_201_CREATED,
        )

    def perform_destroy(self, instance):
        log.info("Time registration %s deleted by %s", instance.pk, self.request.user.pk)
        instance.delete()
