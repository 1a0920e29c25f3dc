import datetime

import pytest

from projects.models import WorkCode
from timesheets.models import TimeRegistration

pytestmark = pytest.mark.django_db


@pytest.fixture
def demolition(db):
    return WorkCode.objects.create(code="100", name="Sloopwerk")


@pytest.fixture
def registration(employee, project):
    return TimeRegistration.objects.create(
        user=employee, project=project, project_name=project.name, date=datetime.date(2024, 3, 11),
        work_code="100", work_code_name="Sloopwerk", hours=6, description="Slopen",
    )


def test_submit_a_day(employee_client, project, demolition):
    res = employee_client.post("/api/time-registrations/", {
        "project": project.pk,
        "date": "2024-03-12",
        "kilometers": "18",
        "progress": 25,
        "lines": [
            {"work_code": "100", "hours": 5, "description": "Slopen badkamer"},
            {"work_code": "100", "hours": 2, "description": "Puin afvoeren"},
        ],
    }, format="json")

    assert res.status_code == 201
    assert len(res.json()["data"]["registrations"]) == 2
    assert res.json()["data"]["booking"] is None
    project.refresh_from_db()
    assert project.progress_percentage == 25


def test_submit_shows_the_form_message(employee_client, demolition):
    res = employee_client.post("/api/time-registrations/", {"lines": []}, format="json")
    assert res.status_code == 400
    assert res.json()["message"] == "Datum en project zijn verplicht"


def test_users_see_only_their_own(employee_client, office_client, make_user, registration, project):
    other = make_user("collega")
    TimeRegistration.objects.create(user=other, project=project, date=registration.date,
                                    work_code="100", hours=1, description="x")

    mine = employee_client.get("/api/time-registrations/").json()
    everything = office_client.get("/api/time-registrations/").json()

    assert [r["id"] for r in mine] == [registration.pk]
    assert len(everything) == 2


def test_owner_can_edit_and_delete(employee_client, registration):
    res = employee_client.patch(f"/api/time-registrations/{registration.pk}/", {"hours": "7.5"}, format="json")
    assert res.status_code == 200
    assert res.json()["hours"] == "7.50"

    assert employee_client.patch(f"/api/time-registrations/{registration.pk}/", {"hours": "30"},
                                 format="json").status_code == 400

    assert employee_client.delete(f"/api/time-registrations/{registration.pk}/").status_code == 204


def test_others_cannot_touch_a_registration(make_user, registration):
    from rest_framework.test import APIClient

    client = APIClient()
    client.force_authenticate(user=make_user("collega"))

    # not in their queryset
    assert client.patch(f"/api/time-registrations/{registration.pk}/", {"hours": "1"}, format="json").status_code == 404


def test_office_can_edit_any_registration(office_client, registration, demolition, fallback_code):
    res = office_client.patch(f"/api/time-registrations/{registration.pk}/", {"work_code": "999"}, format="json")
    assert res.status_code == 200
    assert res.json()["work_code_name"] == "Niet gespecificeerd"


def test_work_code_edit_is_checked_against_the_project(office_client, registration, demolition):
    res = office_client.patch(f"/api/time-registrations/{registration.pk}/", {"work_code": "555"}, format="json")
    assert res.status_code == 400
