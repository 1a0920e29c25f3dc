import pytest

from projects.models import ProjectWorkCode, WorkCode

pytestmark = pytest.mark.django_db


@pytest.fixture
def demolition(db):
    return WorkCode.objects.create(code="100", name="Sloopwerk")


def test_available_codes_for_unrestricted_project(employee_client, project, fallback_code, demolition):
    res = employee_client.get(f"/api/projects/{project.pk}/work-codes/")

    assert res.status_code == 200
    data = res.json()["data"]
    assert [c["code"] for c in data["codes"]] == ["100", "999"]
    assert data["restricted"] is False


def test_available_codes_unknown_project_is_404(employee_client):
    assert employee_client.get("/api/projects/9999/work-codes/").status_code == 404


def test_office_restricts_a_project(office_client, employee_client, project, fallback_code, demolition):
    res = office_client.post(f"/api/projects/{project.pk}/work-codes/custom/",
                             {"code": "R01", "name": "Ruimte 1"}, format="json")
    assert res.status_code == 201

    data = employee_client.get(f"/api/projects/{project.pk}/work-codes/").json()["data"]
    assert [c["code"] for c in data["codes"]] == ["999", "R01"]
    assert data["restricted"] is True

    res = office_client.post(f"/api/projects/{project.pk}/work-codes/toggle/",
                             {"work_code": demolition.pk}, format="json")
    assert res.json()["data"]["linked"] is True
    codes = employee_client.get(f"/api/projects/{project.pk}/work-codes/").json()["data"]["codes"]
    assert [c["code"] for c in codes] == ["100", "999", "R01"]


def test_duplicate_custom_code_is_400(office_client, project):
    url = f"/api/projects/{project.pk}/work-codes/custom/"
    office_client.post(url, {"code": "R01", "name": "Ruimte 1"}, format="json")

    res = office_client.post(url, {"code": "R01", "name": "Nog eens"}, format="json")

    assert res.status_code == 400
    assert res.json()["message"] == "Deze code bestaat al voor dit project"


def test_employees_cannot_change_project_codes(employee_client, project, demolition):
    res = employee_client.post(f"/api/projects/{project.pk}/work-codes/toggle/",
                               {"work_code": demolition.pk}, format="json")
    assert res.status_code == 403
    assert not ProjectWorkCode.objects.exists()


def test_remove_link(office_client, project, demolition):
    link = ProjectWorkCode.objects.create(project=project, work_code=demolition)
    assert office_client.delete(f"/api/project-work-codes/{link.pk}/").status_code == 204
    assert not ProjectWorkCode.objects.exists()


def test_work_code_change_is_visible_immediately(office_client, employee_client, project, demolition):
    assert [c["code"] for c in employee_client.get(f"/api/projects/{project.pk}/work-codes/").json()["data"]["codes"]] == ["100"]

    office_client.post("/api/work-codes/", {"code": "200", "name": "Kozijnen plaatsen"}, format="json")

    codes = employee_client.get(f"/api/projects/{project.pk}/work-codes/").json()["data"]["codes"]
    assert [c["code"] for c in codes] == ["100", "200"]


def test_project_create_records_creator(office_client, office_user):
    res = office_client.post("/api/projects/", {"name": "Nieuwbouw Kerkweg"}, format="json")
    assert res.status_code == 201
    assert res.json()["created_by"] == office_user.pk
