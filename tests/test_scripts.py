"""Maintenance scripts run against the in-memory datastore."""

from app.config.permissions_config import PERMISSION_MATRIX
from app.scripts.migrate_profile_roles import migrate_roles, migrated_role
from app.scripts.seed_permissions_roles import seed_permissions, seed_roles
from tests.support import ADMIN_ID, VIEWER_ID, FakeSupabase


def test_migrated_role_shapes():
    assert migrated_role(["admin"]) is None
    assert migrated_role("Reseller") == ["reseller"]
    assert migrated_role("") == []
    assert migrated_role(None) == []
    assert migrated_role("superuser") == []


def test_migrate_roles_rewrites_only_scalar_values(db):
    assert migrate_roles(db) == 1
    assert db.row("profiles", "user_id", VIEWER_ID)["role"] == ["viewer"]
    assert db.row("profiles", "user_id", ADMIN_ID)["role"] == ["admin"]
    # Second run has nothing left to do
    assert migrate_roles(db) == 0


def test_seed_is_idempotent_and_syncs_role_permissions():
    db = FakeSupabase()
    total = len(PERMISSION_MATRIX["permissions"])

    assert seed_permissions(db) == total
    assert seed_roles(db) == len(PERMISSION_MATRIX["roles"])
    assert len(db.rows("permissions")) == total
    first_assignments = len(db.rows("role_permissions"))

    seed_permissions(db)
    seed_roles(db)
    assert len(db.rows("permissions")) == total
    assert len(db.rows("roles")) == len(PERMISSION_MATRIX["roles"])
    assert len(db.rows("role_permissions")) == first_assignments


def test_seed_removes_stale_assignments():
    db = FakeSupabase()
    seed_permissions(db)
    seed_roles(db)
    admin_role = db.row("roles", "name", "admin")
    db.tables["role_permissions"].append({"role_id": admin_role["id"], "permission_id": "stale"})

    seed_roles(db)
    assert not any(row["permission_id"] == "stale" for row in db.rows("role_permissions"))
