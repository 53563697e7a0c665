import pytest


@pytest.fixture
def headers(auth_headers):
    return auth_headers()


async def create_category(client, headers, slug="shoes", name="Shoes"):
    response = await client.post("/category/", json={"name": name, "slug": slug}, headers=headers)
    assert response.status_code == 200
    return response.json()


async def create_product(client, headers, category_id, sku="SKU-1", **extra):
    payload = {"name": "Runner", "sku": sku, "price": 49.5, "stock": 10, "categoryId": category_id}
    payload.update(extra)
    return await client.post("/product/", json=payload, headers=headers)


async def test_reads_are_public_and_writes_are_not(catalog_client):
    assert (await catalog_client.get("/category/")).status_code == 200
    assert (await catalog_client.get("/product/")).status_code == 200

    for method, path in [("POST", "/category/"), ("PUT", "/category/1"), ("DELETE", "/category/1"),
                         ("POST", "/product/"), ("PUT", "/product/1"), ("DELETE", "/product/1")]:
        response = await catalog_client.request(method, path, json={})
        assert response.status_code == 401, (method, path)


async def test_category_crud(catalog_client, headers):
    category = await create_category(catalog_client, headers)

    fetched = await catalog_client.get(f"/category/{category['id']}")
    renamed = await catalog_client.put(
        f"/category/{category['id']}", json={"name": "Footwear"}, headers=headers
    )
    deleted = await catalog_client.delete(f"/category/{category['id']}", headers=headers)

    assert fetched.json()["slug"] == "shoes"
    assert renamed.json()["name"] == "Footwear"
    assert renamed.json()["slug"] == "shoes"
    assert deleted.json() == {"message": "resource deleted successfully"}
    assert (await catalog_client.get(f"/category/{category['id']}")).status_code == 404


async def test_duplicate_slug_is_a_conflict(catalog_client, headers):
    await create_category(catalog_client, headers)

    response = await catalog_client.post("/category/", json={"name": "Other", "slug": "shoes"}, headers=headers)

    assert response.status_code == 409


async def test_duplicate_sku_is_a_conflict(catalog_client, headers):
    category = await create_category(catalog_client, headers)

    first = await create_product(catalog_client, headers, category["id"])
    second = await create_product(catalog_client, headers, category["id"], name="Other")

    assert first.status_code == 200
    assert second.status_code == 409
    assert second.json() == {"error": "resource already exists"}


async def test_partial_update_isolation(catalog_client, headers):
    category = await create_category(catalog_client, headers)
    product = (await create_product(catalog_client, headers, category["id"])).json()

    response = await catalog_client.put(f"/product/{product['id']}", json={"stock": 5}, headers=headers)

    assert response.status_code == 200
    updated = response.json()
    assert updated["stock"] == 5
    for field in ("name", "price", "sku", "categoryId", "isActive"):
        assert updated[field] == product[field]


@pytest.mark.parametrize("payload", [{"price": -1}, {"stock": -3}, {"unknown": 1}])
async def test_invalid_product_update_is_rejected(catalog_client, headers, payload):
    category = await create_category(catalog_client, headers)
    product = (await create_product(catalog_client, headers, category["id"])).json()

    response = await catalog_client.put(f"/product/{product['id']}", json=payload, headers=headers)

    assert response.status_code == 400


async def test_negative_price_is_rejected_on_create(catalog_client, headers):
    category = await create_category(catalog_client, headers)

    response = await create_product(catalog_client, headers, category["id"], price=-0.01)

    assert response.status_code == 400
    assert response.json() == {"error": "validation error"}


async def test_inactive_products_are_hidden_from_listings(catalog_client, headers):
    category = await create_category(catalog_client, headers)
    visible = (await create_product(catalog_client, headers, category["id"], sku="A")).json()
    hidden = (await create_product(catalog_client, headers, category["id"], sku="B", isActive=False)).json()

    listed = (await catalog_client.get("/product/")).json()
    by_category = (await catalog_client.get(f"/product/category/{category['id']}")).json()

    assert [p["id"] for p in listed] == [visible["id"]]
    assert [p["id"] for p in by_category] == [visible["id"]]
    # Still reachable directly
    assert (await catalog_client.get(f"/product/{hidden['id']}")).status_code == 200


async def test_products_by_category(catalog_client, headers):
    shoes = await create_category(catalog_client, headers)
    hats = await create_category(catalog_client, headers, slug="hats", name="Hats")
    shoe = (await create_product(catalog_client, headers, shoes["id"], sku="S1")).json()
    await create_product(catalog_client, headers, hats["id"], sku="H1")

    response = await catalog_client.get(f"/product/category/{shoes['id']}")

    assert [p["id"] for p in response.json()] == [shoe["id"]]


async def test_product_delete_is_hard(catalog_client, headers):
    category = await create_category(catalog_client, headers)
    product = (await create_product(catalog_client, headers, category["id"])).json()

    await catalog_client.delete(f"/product/{product['id']}", headers=headers)

    assert (await catalog_client.get(f"/product/{product['id']}")).status_code == 404
    # The SKU is free again
    assert (await create_product(catalog_client, headers, category["id"])).status_code == 200


async def test_null_clears_an_optional_field(catalog_client, headers):
    category = await create_category(catalog_client, headers)
    product = (await create_product(
        catalog_client, headers, category["id"], description="Light", imageUrl="http://img/1.png"
    )).json()

    response = await catalog_client.put(f"/product/{product['id']}", json={"imageUrl": None}, headers=headers)

    assert response.status_code == 200
    assert response.json()["imageUrl"] is None
    assert response.json()["description"] == "Light"


@pytest.mark.parametrize("field", ["name", "price", "sku", "isActive"])
async def test_null_on_a_required_field_is_rejected(catalog_client, headers, field):
    category = await create_category(catalog_client, headers)
    product = (await create_product(catalog_client, headers, category["id"])).json()

    response = await catalog_client.put(f"/product/{product['id']}", json={field: None}, headers=headers)

    assert response.status_code == 400
    assert (await catalog_client.get(f"/product/{product['id']}")).json()[field] == product[field]


async def test_browser_preflight_is_answered(catalog_client):
    response = await catalog_client.options(
        "/product/",
        headers={
            "Origin": "http://shop.example.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "authorization, content-type",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] in ("http://shop.example.com", "*")
    assert "POST" in response.headers["access-control-allow-methods"]


async def test_cors_headers_on_simple_requests(catalog_client):
    response = await catalog_client.get("/category/", headers={"Origin": "http://shop.example.com"})

    assert response.status_code == 200
    assert "access-control-allow-origin" in response.headers
