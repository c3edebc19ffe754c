from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.core.cache import cache
from rest_framework.test import APIClient

from storefront.models import Category, Product

FRONTEND_KEY = "test-frontend-key"


@pytest.fixture(autouse=True)
def frontend_key(settings):
    settings.FRONTEND_KEY = FRONTEND_KEY
    settings.WHATSAPP_NUMBER = "919824044585"
    return FRONTEND_KEY


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    return APIClient(HTTP_X_FRONTEND_KEY=FRONTEND_KEY)


@pytest.fixture
def shopper(db):
    return get_user_model().objects.create_user(
        username="shopper", email="shopper@example.com", password="pass1234"
    )


@pytest.fixture
def store_admin(db):
    user = get_user_model().objects.create_user(
        username="owner", email="owner@example.com", password="pass1234"
    )
    user.profile.role = "admin"
    user.profile.save()
    return user


@pytest.fixture
def shopper_client(api_client, shopper):
    api_client.force_authenticate(user=shopper)
    return api_client


@pytest.fixture
def admin_api(api_client, store_admin):
    api_client.force_authenticate(user=store_admin)
    return api_client


@pytest.fixture
def sofas(db):
    return Category.objects.create(name="Sofas", show_on_home=True, home_order=1)


@pytest.fixture
def make_product(db):
    def _make(title, price, **extra):
        return Product.objects.create(title=title, price=Decimal(str(price)), **extra)
    return _make
