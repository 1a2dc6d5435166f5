"""Product routes: every operation is admin-only."""

from tests.support import ADMIN_ID, MISSING_ID, PRODUCT_ID, RESELLER_ID


async def test_admin_lists_products(client, db):
    response = await client.get("/api/admin/products", headers=db.headers_for(ADMIN_ID))
    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 1
    assert body["data"][0]["name"] == "Voice Agent"
    assert body["has_more"] is False


async def test_reseller_cannot_list_products(client, db):
    response = await client.get("/api/admin/products", headers=db.headers_for(RESELLER_ID))
    assert response.status_code == 403


async def test_reseller_cannot_read_product(client, db):
    response = await client.get(f"/api/admin/products/{PRODUCT_ID}", headers=db.headers_for(RESELLER_ID))
    assert response.status_code == 403
    assert response.json() == {"error": "Forbidden: Not allowed to read this product"}


async def test_admin_creates_product(client, db):
    response = await client.post(
        "/api/admin/products",
        json={"name": "SMS Bot", "description": "Outbound SMS campaigns"},
        headers=db.headers_for(ADMIN_ID),
    )
    assert response.status_code == 201
    assert response.json()["data"]["name"] == "SMS Bot"
    assert len(db.rows("products")) == 2


async def test_product_validation_messages(client, db):
    response = await client.post(
        "/api/admin/products",
        json={"name": "X", "description": "tiny"},
        headers=db.headers_for(ADMIN_ID),
    )
    assert response.status_code == 400
    assert response.json()["fields"] == {
        "name": "Product name must be at least 2 characters long",
        "description": "Product description must be at least 5 characters long",
    }


async def test_admin_updates_and_deletes_product(client, db):
    headers = db.headers_for(ADMIN_ID)
    response = await client.put(
        f"/api/admin/products/{PRODUCT_ID}",
        json={"name": "Voice Agent Pro", "description": "Inbound and outbound calls"},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json()["data"]["name"] == "Voice Agent Pro"

    response = await client.delete(f"/api/admin/products/{PRODUCT_ID}", headers=headers)
    assert response.status_code == 200
    assert db.rows("products") == []


async def test_unknown_product_is_404(client, db):
    response = await client.get(f"/api/admin/products/{MISSING_ID}", headers=db.headers_for(ADMIN_ID))
    assert response.status_code == 404
    assert response.json() == {"error": "Product not found"}


async def test_product_changes_are_logged(client, db):
    headers = db.headers_for(ADMIN_ID)
    await client.put(
        f"/api/admin/products/{PRODUCT_ID}", json={"name": "Voice Agent Pro", "description": "Inbound calls"},
        headers=headers,
    )
    await client.delete(f"/api/admin/products/{PRODUCT_ID}", headers=headers)
    entries = [(row["action_type"], row["table_name"], row["target_id"]) for row in db.rows("activity_logs")]
    assert entries == [("update", "products", PRODUCT_ID), ("delete", "products", PRODUCT_ID)]
