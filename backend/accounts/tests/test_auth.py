import pytest

from accounts.models import Profile
from accounts.permissions import display_name, is_office, role_of

pytestmark = pytest.mark.django_db


def test_every_user_gets_an_employee_profile(django_user_model):
    user = django_user_model.objects.create_user(username="nieuw", password="x")
    assert user.profile.role == Profile.EMPLOYEE
    assert not is_office(user)


def test_office_roles(make_user, django_user_model):
    assert is_office(make_user("a", role=Profile.ADMIN))
    assert is_office(make_user("b", role=Profile.OFFICE))
    assert is_office(make_user("c", role=Profile.SUPERUSER))
    assert is_office(django_user_model.objects.create_superuser(username="root", password="x"))
    assert role_of(make_user("d")) == Profile.EMPLOYEE


def test_display_name_prefers_profile_name(make_user):
    user = make_user("pieter")
    assert display_name(user) == "pieter"
    user.profile.name = "Pieter de Vries"
    assert display_name(user) == "Pieter de Vries"
    assert display_name(None) == "Onbekend"


def test_token_login_me_and_logout(api_client, office_user):
    res = api_client.post("/api/auth/token/", {"username": "kantoor", "password": "geheim123"}, format="json")
    assert res.status_code == 200
    tokens = res.json()

    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")
    me = api_client.get("/api/auth/me/").json()
    assert me["username"] == "kantoor"
    assert me["role"] == Profile.OFFICE
    assert me["is_office"] is True

    assert api_client.post("/api/auth/logout/", {"refresh": tokens["refresh"]}, format="json").status_code == 205
    refresh = api_client.post("/api/auth/token/refresh/", {"refresh": tokens["refresh"]}, format="json")
    assert refresh.status_code == 401


def test_logout_needs_a_valid_refresh_token(api_client):
    assert api_client.post("/api/auth/logout/", {}, format="json").status_code == 400
    assert api_client.post("/api/auth/logout/", {"refresh": "rommel"}, format="json").status_code == 400
