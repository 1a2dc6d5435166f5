"""Brand routes: admin listing, owner-or-admin record access, error bodies."""

from tests.support import (
    ADMIN_ID, BRAND_ID, DEACTIVATED_ID, MISSING_ID, OTHER_BRAND_ID, RESELLER_ID, VIEWER_ID,
)


async def test_owner_can_read_brand(client, db):
    response = await client.get(f"/api/admin/brands/{BRAND_ID}", headers=db.headers_for(RESELLER_ID))
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["id"] == BRAND_ID
    assert body["data"]["owner_email"] == "rita@example.com"


async def test_non_owner_gets_403(client, db):
    response = await client.put(
        f"/api/admin/brands/{OTHER_BRAND_ID}",
        json={"name": "Taken over"},
        headers=db.headers_for(RESELLER_ID),
    )
    assert response.status_code == 403
    assert response.json() == {"error": "Forbidden: Not allowed to update this brand"}
    assert db.row("brands", "id", OTHER_BRAND_ID)["name"] == "Oscar's Brand"


async def test_admin_can_update_any_brand(client, db):
    response = await client.put(
        f"/api/admin/brands/{OTHER_BRAND_ID}",
        json={"niche": "fitness"},
        headers=db.headers_for(ADMIN_ID),
    )
    assert response.status_code == 200
    assert response.json()["data"]["niche"] == "fitness"
    assert response.json()["data"]["name"] == "Oscar's Brand"


async def test_missing_token_is_401(client):
    response = await client.get(f"/api/admin/brands/{BRAND_ID}")
    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}


async def test_invalid_token_is_401(client):
    response = await client.get(
        f"/api/admin/brands/{BRAND_ID}", headers={"Authorization": "Bearer forged"}
    )
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid or expired token"}


async def test_unknown_brand_is_404(client, db):
    response = await client.delete(f"/api/admin/brands/{MISSING_ID}", headers=db.headers_for(ADMIN_ID))
    assert response.status_code == 404
    assert response.json() == {"error": "Brand not found"}


async def test_malformed_id_is_400(client, db):
    response = await client.get("/api/admin/brands/not-a-uuid", headers=db.headers_for(ADMIN_ID))
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid brand ID format"}


async def test_deactivated_owner_is_403(client, db):
    db.tables["brands"].append({"id": MISSING_ID, "name": "Dormant", "owner_user_id": DEACTIVATED_ID})
    response = await client.get(f"/api/admin/brands/{MISSING_ID}", headers=db.headers_for(DEACTIVATED_ID))
    assert response.status_code == 403


async def test_owner_can_delete_brand(client, db):
    response = await client.delete(f"/api/admin/brands/{BRAND_ID}", headers=db.headers_for(RESELLER_ID))
    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Brand deleted successfully"}
    assert db.row("brands", "id", BRAND_ID) is None


async def test_create_brand_sets_owner_and_default_timezone(client, db):
    response = await client.post(
        "/api/admin/brands/create",
        json={"name": "  Fresh Brand  "},
        headers=db.headers_for(VIEWER_ID),
    )
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["name"] == "Fresh Brand"
    assert data["owner_user_id"] == VIEWER_ID
    assert data["timezone"] == "UTC"


async def test_create_brand_requires_name(client, db):
    response = await client.post(
        "/api/admin/brands/create", json={"name": "   "}, headers=db.headers_for(RESELLER_ID)
    )
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation failed"
    assert body["fields"] == {"name": "Brand name is required"}


async def test_list_brands_is_admin_only(client, db):
    response = await client.get("/api/admin/brands", headers=db.headers_for(RESELLER_ID))
    assert response.status_code == 403
    assert response.json() == {"error": "Forbidden: Admin access required"}


async def test_list_brands_paginates_newest_first(client, db):
    response = await client.get("/api/admin/brands?page=1&limit=1", headers=db.headers_for(ADMIN_ID))
    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 2
    assert body["limit"] == 1
    assert [b["id"] for b in body["brands"]] == [BRAND_ID]
    assert body["brands"][0]["owner_email"] == "rita@example.com"


async def test_datastore_failure_is_generic_500(client, db):
    response = await client.get(f"/api/admin/brands/{BRAND_ID}", headers=db.headers_for(ADMIN_ID))
    assert response.status_code == 200
    db.failing_tables.add("brands")
    response = await client.get("/api/admin/brands", headers=db.headers_for(ADMIN_ID))
    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


async def test_security_headers_are_set(client, db):
    response = await client.get("/health")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"


async def test_brand_update_is_logged_for_owner(client, db):
    response = await client.put(
        f"/api/admin/brands/{BRAND_ID}", json={"niche": "fitness"}, headers=db.headers_for(RESELLER_ID)
    )
    assert response.status_code == 200
    (entry,) = db.rows("activity_logs")
    assert entry["table_name"] == "brands"
    assert entry["actor_id"] == RESELLER_ID
    assert entry["changed_fields"] == {"niche": "fitness"}
