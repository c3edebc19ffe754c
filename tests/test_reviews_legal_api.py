import pytest
from django.contrib.auth import get_user_model

from storefront import models
from storefront.models import FooterSocialLink, LegalPage, ProductPageSettings, ProductReview
from storefront.testimonials import rating_summary

pytestmark = pytest.mark.django_db


@pytest.fixture
def sofa(make_product, sofas):
    return make_product("Teak Sofa", 25000, category=sofas)


# --------------------------
# Reviews
# --------------------------

def test_review_requires_login(api_client, sofa):
    res = api_client.post("/api/save-product-review/", {"product_id": str(sofa.pk), "rating": 5}, format="json")
    assert res.status_code == 401
    assert res.json()["redirect"] == "/login"


def test_review_is_pending_and_one_per_shopper(shopper_client, sofa):
    payload = {"product_id": str(sofa.pk), "rating": 4, "comment": "Solid build", "status": "approved"}
    res = shopper_client.post("/api/save-product-review/", payload, format="json")
    assert res.status_code == 201
    assert res.json()["review"]["status"] == "pending"

    res = shopper_client.post("/api/save-product-review/", payload, format="json")
    assert res.status_code == 400
    assert res.json()["error"] == "You have already reviewed this product."
    assert ProductReview.objects.count() == 1


def test_public_list_shows_only_approved(api_client, shopper, sofa):
    other = get_user_model().objects.create_user(username="second", password="x")
    third = get_user_model().objects.create_user(username="third", password="x")
    ProductReview.objects.create(product=sofa, user=shopper, rating=5, status="approved")
    ProductReview.objects.create(product=sofa, user=other, rating=4, status="approved")
    ProductReview.objects.create(product=sofa, user=third, rating=1, status="pending")

    body = api_client.get("/api/show-product-reviews/teak-sofa/").json()
    assert len(body["reviews"]) == 2
    assert body["summary"] == {"average": 4.5, "count": 2}


def test_rating_summary_rounds_to_one_decimal(shopper, sofa):
    assert rating_summary(sofa) == {"average": 0.0, "count": 0}
    users = [shopper] + [
        get_user_model().objects.create_user(username=f"u{i}", password="x") for i in range(2)
    ]
    for user, rating in zip(users, (5, 4, 4)):
        ProductReview.objects.create(product=sofa, user=user, rating=rating, status="approved")
    assert rating_summary(sofa) == {"average": 4.3, "count": 3}


def test_admin_moderates_reviews(admin_api, shopper, sofa):
    review = ProductReview.objects.create(product=sofa, user=shopper, rating=3)

    pending = admin_api.get("/api/show-admin-reviews/", {"status": "pending"}).json()
    assert [r["id"] for r in pending] == [str(review.id)]

    res = admin_api.post("/api/edit-review-status/", {"id": str(review.id), "status": "pending"}, format="json")
    assert res.status_code == 400
    res = admin_api.post("/api/edit-review-status/", {"id": str(review.id), "status": "approved"}, format="json")
    assert res.json()["review"]["status"] == "approved"

    admin_api.post("/api/delete-review/", {"id": str(review.id)}, format="json")
    assert not ProductReview.objects.exists()


# --------------------------
# Testimonials
# --------------------------

def test_home_testimonials_are_active_and_flagged(api_client):
    models.Testimonial.objects.create(name="B", review_text="Great", display_order=2)
    models.Testimonial.objects.create(name="A", review_text="Lovely", display_order=1)
    models.Testimonial.objects.create(name="Hidden", review_text="x", active=False)
    models.Testimonial.objects.create(name="Not home", review_text="x", show_on_home=False)

    names = [t["name"] for t in api_client.get("/api/show-testimonials/").json()]
    assert names == ["A", "B"]


def test_full_testimonial_list_is_admin_only(api_client):
    assert api_client.get("/api/show-testimonials/?all=1").status_code in (401, 403)


def test_admin_testimonial_crud(admin_api):
    res = admin_api.post("/api/save-testimonial/", {"name": "Riya", "review_text": "Comfy", "rating": 9},
                         format="json")
    assert res.status_code == 201
    assert res.json()["rating"] == 5

    tid = res.json()["id"]
    res = admin_api.post("/api/edit-testimonial/", {"id": tid, "city": "Ahmedabad"}, format="json")
    assert res.json()["city"] == "Ahmedabad"

    res = admin_api.post("/api/edit-testimonial/", {"id": tid, "name": ""}, format="json")
    assert res.status_code == 400
    assert models.Testimonial.objects.get().name == "Riya"

    assert len(admin_api.get("/api/show-testimonials/?all=1").json()) == 1
    admin_api.post("/api/delete-testimonial/", {"id": tid}, format="json")
    assert not models.Testimonial.objects.exists()


# --------------------------
# Legal pages
# --------------------------

def test_legal_pages_public_views(api_client):
    LegalPage.objects.create(title="Terms of Service", content="<p>Terms</p>", is_published=True)
    LegalPage.objects.create(title="Privacy Policy", content="<p>Privacy</p>", is_published=True)
    LegalPage.objects.create(title="Draft Policy", is_published=False)

    listing = api_client.get("/api/show-legal-pages/").json()
    assert listing == [
        {"slug": "privacy-policy", "title": "Privacy Policy"},
        {"slug": "terms-of-service", "title": "Terms of Service"},
    ]

    page = api_client.get("/api/show-legal-page/terms-of-service/").json()
    assert page["content"] == "<p>Terms</p>"

    res = api_client.get("/api/show-legal-page/draft-policy/")
    assert res.status_code == 404
    assert res.json()["not_found"] is True


def test_admin_legal_pages(admin_api):
    res = admin_api.post("/api/save-legal-page/", {"title": "Refund Policy", "content": "No refunds"},
                         format="json")
    assert res.status_code == 201
    assert res.json()["slug"] == "refund-policy"
    assert res.json()["is_published"] is False

    dup = admin_api.post("/api/save-legal-page/", {"title": "Other", "slug": "refund-policy"}, format="json")
    assert dup.status_code == 400

    pid = res.json()["id"]
    res = admin_api.post("/api/edit-legal-page/", {"id": pid, "is_published": True}, format="json")
    assert res.json()["is_published"] is True
    assert admin_api.get("/api/show-legal-page/refund-policy/").status_code == 200

    admin_api.post("/api/delete-legal-page/", {"id": pid}, format="json")
    assert not LegalPage.objects.exists()


# --------------------------
# Site details
# --------------------------

def test_footer_links(api_client, admin_api):
    res = admin_api.post("/api/save-footer-link/", {"platform": "Instagram", "url": "notaurl"}, format="json")
    assert res.status_code == 400

    res = admin_api.post("/api/save-footer-link/", {
        "platform": "Instagram", "url": "https://instagram.com/store",
    }, format="json")
    assert res.status_code == 201
    assert res.json()["icon"] == "instagram"

    FooterSocialLink.objects.create(platform="Hidden", url="https://example.com", is_active=False)
    links = api_client.get("/api/show-footer-links/").json()
    assert [link["platform"] for link in links] == ["Instagram"]


def test_product_page_settings_defaults_and_update(api_client, admin_api):
    body = api_client.get("/api/show-product-page-settings/").json()
    assert body["delivery_button_text"] == "Check"
    assert not ProductPageSettings.objects.exists()

    res = admin_api.post("/api/edit-product-page-settings/", {"product_tag_label": "Office"}, format="json")
    assert res.json()["product_tag_label"] == "Office"
    assert ProductPageSettings.objects.count() == 1
    assert admin_api.post("/api/edit-product-page-settings/", {"pricing_note": " "},
                          format="json").status_code == 400
