from django.conf import settings
from rest_framework.permissions import SAFE_METHODS, BasePermission


def role_of(user):
    profile = getattr(user, "profile", None)
    return profile.role if profile else None


def is_office(user) -> bool:
    """Admin, office staff and superusers see everything and may correct data."""
    if not user or not user.is_authenticated:
        return False
    return user.is_superuser or role_of(user) in settings.BACKOFFICE["OFFICE_ROLES"]


def display_name(user) -> str:
    if user is None:
        return "Onbekend"
    profile = getattr(user, "profile", None)
    return profile.display_name if profile else user.get_username()


class IsOfficeStaff(BasePermission):
    message = "Alleen kantoorpersoneel en beheerders mogen dit wijzigen."

    def has_permission(self, request, view):
        return is_office(request.user)


class IsOfficeStaffOrReadOnly(IsOfficeStaff):

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return bool(request.user and request.user.is_authenticated)
        return is_office(request.user)


class IsOwnerOrOfficeStaff(BasePermission):
    """Object access for the row's owner (`view.owner_field`, default "user") and office staff."""
    message = "Je hebt geen rechten om deze registratie te bewerken."

    def has_object_permission(self, request, view, obj):
        if is_office(request.user):
            return True
        owner_id = getattr(obj, f"{getattr(view, 'owner_field', 'user')}_id", None)
        return owner_id is not None and owner_id == request.user.pk
