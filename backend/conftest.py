from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.core.cache import cache
from rest_framework.test import APIClient

from accounts.models import Profile
from inventory.models import Location, Product, StockEntry
from projects.models import Project, WorkCode


@pytest.fixture(autouse=True)
def _clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def make_user(db):
    def _make(username, role=Profile.EMPLOYEE, password="geheim123", **extra):
        user = get_user_model().objects.create_user(username=username, password=password, **extra)
        user.profile.role = role
        user.profile.save()
        return user
    return _make


@pytest.fixture
def office_user(make_user):
    return make_user("kantoor", role=Profile.OFFICE)


@pytest.fixture
def admin_user(make_user):
    return make_user("beheer", role=Profile.ADMIN)


@pytest.fixture
def employee(make_user):
    return make_user("monteur", role=Profile.EMPLOYEE)


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def office_client(office_user):
    client = APIClient()
    client.force_authenticate(user=office_user)
    return client


@pytest.fixture
def employee_client(employee):
    client = APIClient()
    client.force_authenticate(user=employee)
    return client


@pytest.fixture
def make_product(db):
    counter = {"n": 0}

    def _make(name=None, sku=None, **extra):
        counter["n"] += 1
        n = counter["n"]
        return Product.objects.create(name=name or f"Product {n:02d}", sku=sku or f"SKU-{n:03d}", **extra)
    return _make


@pytest.fixture
def make_location(db):
    def _make(name, **extra):
        return Location.objects.create(name=name, **extra)
    return _make


@pytest.fixture
def warehouse(make_location):
    return make_location("Magazijn")


@pytest.fixture
def van(make_location):
    return make_location("Bus 1", type=Location.VEHICLE, license_plate="VX-123-B")


@pytest.fixture
def set_stock(db):
    def _set(product, location, quantity):
        entry, _ = StockEntry.objects.update_or_create(
            product=product, location=location, defaults={"quantity": Decimal(str(quantity))},
        )
        return entry
    return _set


@pytest.fixture
def stock_of(db):
    def _get(product, location):
        entry = StockEntry.objects.filter(product=product, location=location).first()
        return entry.quantity if entry is not None else None
    return _get


@pytest.fixture
def project(db):
    return Project.objects.create(name="Renovatie Dorpsstraat", number="P-2024-01")


@pytest.fixture
def fallback_code(db):
    return WorkCode.objects.create(code="999", name="Niet gespecificeerd", sort_order=999)
