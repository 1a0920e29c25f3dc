from rest_framework import mixins, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated

from accounts.permissions import IsOwnerOrOfficeStaff, is_office
from inventory.utils import respond

from .models import Notification
from .serializers import NotificationSerializer


class NotificationViewSet(mixins.ListModelMixin,
                          mixins.RetrieveModelMixin,
                          mixins.DestroyModelMixin,
                          viewsets.GenericViewSet):
    serializer_class = NotificationSerializer
    permission_classes = [IsAuthenticated, IsOwnerOrOfficeStaff]
    owner_field = "recipient"

    def get_queryset(self):
        qs = Notification.objects.select_related("sender").order_by("-created_at", "-id")
        if not is_office(self.request.user):
            qs = qs.filter(recipient=self.request.user)
        state = self.request.query_params.get("status")
        if state:
            qs = qs.filter(status=state)
        return qs

    def _set_status(self, state, message):
        n = self.get_object()
        n.status = state
        n.save(update_fields=["status"])
        return respond(NotificationSerializer(n).data, message)

    @action(detail=True, methods=["post"])
    def read(self, request, pk=None):
        return self._set_status(Notification.READ, "Melding gemarkeerd als gelezen.")

    @action(detail=True, methods=["post"])
    def archive(self, request, pk=None):
        return self._set_status(Notification.ARCHIVED, "Melding gearchiveerd.")
