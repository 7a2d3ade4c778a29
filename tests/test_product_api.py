import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from notification import feed
from product.models import Product, ProductInterest

pytestmark = pytest.mark.django_db

LISTING = {
    "title": "Casio fx-991EX",
    "description": "Scientific calculator, used for one semester",
    "price": "1200.00",
    "original_price": "1500.00",
    "category": "Electronics",
    "condition": "Good",
    "location": "Hostel 4",
    "tags": "Calculator, casio, calculator",
}

# 1x1 transparent GIF
GIF = (
    b"GIF89a\x01\x00\x01\x00\x80\x00\x00\x00\x00\x00\xff\xff\xff!\xf9\x04\x01\x00\x00\x00\x00"
    b",\x00\x00\x00\x00\x01\x00\x01\x00\x00\x02\x02D\x01\x00;"
)


def detail_url(product, suffix=""):
    return f"/api/v1/products/{product.pk}/{suffix}"


class TestCreate:
    def test_create_listing(self, alice, client_for):
        response = client_for(alice).post("/api/v1/products/", LISTING, format="json")

        assert response.status_code == 201
        product = response.data["product"]
        assert product["seller"]["id"] == alice.id
        assert product["tags"] == ["calculator", "casio"]
        assert product["discount_percentage"] == 20
        assert product["status"] == "available"

    def test_create_with_images(self, alice, client_for):
        data = {**LISTING, "images": [SimpleUploadedFile("front.gif", GIF, content_type="image/gif")]}

        response = client_for(alice).post("/api/v1/products/", data, format="multipart")

        assert response.status_code == 201
        images = Product.objects.get().images
        assert len(images) == 1
        assert images[0]["public_id"].startswith("campusmart/products/")
        assert images[0]["public_id"].endswith(".gif")

    def test_missing_fields(self, alice, client_for):
        response = client_for(alice).post("/api/v1/products/", {"title": "Lamp"}, format="json")

        assert response.status_code == 400
        assert response.data["error"] == "InvalidArgument"
        assert "price" in response.data["errors"]

    def test_anonymous_cannot_create(self, api_client):
        response = api_client.post("/api/v1/products/", LISTING, format="json")
        assert response.status_code == 401


class TestBrowse:
    def test_list_is_public_and_hides_sold(self, api_client, alice, make_product):
        make_product(alice, title="Available")
        make_product(alice, title="Gone", is_available=False)

        response = api_client.get("/api/v1/products/")

        assert response.status_code == 200
        assert [p["title"] for p in response.data["products"]] == ["Available"]
        assert response.data["pagination"]["total_products"] == 1

    def test_filters_and_sort(self, api_client, alice, make_product):
        make_product(alice, title="Cheap calculator", price=300)
        make_product(alice, title="Fancy calculator", price=3000)
        make_product(alice, title="Sofa", description="Three-seater", category="Furniture", price=5000)

        response = api_client.get("/api/v1/products/", {"search": "calculator", "sort": "price_high"})
        assert [p["title"] for p in response.data["products"]] == ["Fancy calculator", "Cheap calculator"]

        response = api_client.get("/api/v1/products/", {"category": "Furniture", "max_price": 6000})
        assert [p["title"] for p in response.data["products"]] == ["Sofa"]

    def test_search_ignores_json_punctuation_in_tags(self, api_client, alice, make_product):
        make_product(alice, title="Desk lamp", description="Warm light", tags=["study", "lamp"])
        make_product(alice, title="Casio calculator", description="Scientific", tags=["casio"])

        for term in ('"', ",", "[", '", "'):
            response = api_client.get("/api/v1/products/", {"search": term})
            assert response.data["products"] == [], term

        response = api_client.get("/api/v1/products/", {"search": "casio"})
        assert [p["title"] for p in response.data["products"]] == ["Casio calculator"]

    def test_view_count_ignores_the_seller(self, alice, bob, make_product, client_for):
        product = make_product(alice)

        client_for(alice).get(detail_url(product))
        response = client_for(bob).get(detail_url(product))

        assert response.data["product"]["views"] == 1
        assert "interested_users" not in response.data["product"]


class TestOwnership:
    def test_only_seller_can_edit(self, alice, bob, make_product, client_for):
        product = make_product(alice)

        response = client_for(bob).patch(detail_url(product), {"price": "1"}, format="json")

        assert response.status_code == 403
        assert response.data["error"] == "Unauthorized"

    def test_seller_edits_partially(self, alice, make_product, client_for):
        product = make_product(alice)

        response = client_for(alice).put(detail_url(product), {"price": "999.50"}, format="json")

        assert response.status_code == 200
        product.refresh_from_db()
        assert str(product.price) == "999.50"
        assert product.title == "Casio fx-991EX Calculator"

    def test_only_seller_can_delete(self, alice, bob, make_product, client_for):
        product = make_product(alice)

        assert client_for(bob).delete(detail_url(product)).status_code == 403
        assert client_for(alice).delete(detail_url(product)).status_code == 200
        assert not Product.objects.exists()

    def test_unknown_product(self, alice, client_for):
        response = client_for(alice).get("/api/v1/products/999999/")

        assert response.status_code == 404
        assert response.data["error"] == "NotFound"


class TestSoldAndAvailable:
    def test_mark_sold_notifies_seller(self, alice, bob, make_product, client_for):
        product = make_product(alice)

        response = client_for(alice).patch(detail_url(product, "sold/"), {"buyer_id": bob.id}, format="json")

        assert response.status_code == 200
        product.refresh_from_db()
        assert product.is_available is False
        assert product.sold_to == bob
        assert product.status == "sold"
        assert feed.list_entries(alice.id)[0]["type"] == feed.PRODUCT_SOLD

    def test_relist(self, alice, make_product, client_for):
        product = make_product(alice, is_available=False)

        client_for(alice).patch(detail_url(product, "available/"), format="json")

        product.refresh_from_db()
        assert product.is_available is True
        assert product.sold_at is None

    def test_buyer_cannot_mark_sold(self, alice, bob, make_product, client_for):
        product = make_product(alice)
        assert client_for(bob).patch(detail_url(product, "sold/"), format="json").status_code == 403


class TestInterest:
    def test_interest_notifies_seller_once(self, alice, bob, make_product, client_for):
        product = make_product(alice)
        client = client_for(bob)

        first = client.post(detail_url(product, "interest/"))
        second = client.post(detail_url(product, "interest/"))

        assert first.status_code == 200
        assert second.status_code == 400
        assert second.data["error"] == "InvalidArgument"
        assert ProductInterest.objects.filter(product=product, user=bob).count() == 1
        assert [e["type"] for e in feed.list_entries(alice.id)] == [feed.PRODUCT_INTEREST]

    def test_no_interest_in_own_product(self, alice, make_product, client_for):
        product = make_product(alice)
        assert client_for(alice).post(detail_url(product, "interest/")).status_code == 400

    def test_interested_users_are_for_the_seller(self, alice, bob, make_product, client_for):
        product = make_product(alice)
        client_for(bob).post(detail_url(product, "interest/"))

        response = client_for(alice).get(detail_url(product, "interested/"))
        assert [u["user"]["id"] for u in response.data["interested_users"]] == [bob.id]

        assert client_for(bob).get(detail_url(product, "interested/")).status_code == 403

    def test_my_products(self, alice, bob, make_product, client_for):
        mine = make_product(alice, is_available=False)
        make_product(bob)

        response = client_for(alice).get("/api/v1/products/my-products/")

        assert [p["id"] for p in response.data["products"]] == [mine.pk]
        assert response.data["products"][0]["interested_users"] == []
