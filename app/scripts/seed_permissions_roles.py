"""
Seed Permissions and Roles Script
This script populates the permissions, roles and role_permissions tables from
app.config.permissions_config so the console and the database agree on the
capability matrix.
Run with: python -m app.scripts.seed_permissions_roles
"""

import logging
import sys
from typing import List

from supabase import Client

from app.config import settings
from app.config.permissions_config import PERMISSION_MATRIX
from app.database.supabase_client import create_supabase_clients

logger = logging.getLogger(__name__)


def seed_permissions(supabase: Client) -> int:
    """Upsert every "<resource>:<action>" permission"""
    logger.info("Seeding permissions...")
    created_count = 0
    updated_count = 0

    for perm in PERMISSION_MATRIX["permissions"]:
        try:
            existing = supabase.table("permissions")\
                .select("id")\
                .eq("name", perm["name"])\
                .execute()

            fields = {
                "resource": perm["resource"],
                "action": perm["action"],
                "description": perm["description"]
            }
            if existing.data:
                supabase.table("permissions").update(fields).eq("name", perm["name"]).execute()
                updated_count += 1
                logger.debug(f"Updated permission: {perm['name']}")
            else:
                supabase.table("permissions").insert({"name": perm["name"], **fields}).execute()
                created_count += 1
                logger.debug(f"Created permission: {perm['name']}")
        except Exception as e:
            logger.error(f"Error processing permission {perm['name']}: {e}")

    logger.info(f"Permissions seeded: {created_count} created, {updated_count} updated")
    return created_count + updated_count


def seed_roles(supabase: Client) -> int:
    """Upsert every role and sync its permission assignments"""
    logger.info("Seeding roles...")
    created_count = 0
    updated_count = 0

    for role in PERMISSION_MATRIX["roles"]:
        try:
            existing = supabase.table("roles")\
                .select("id")\
                .eq("name", role["name"])\
                .execute()

            if existing.data:
                supabase.table("roles")\
                    .update({"description": role["description"]})\
                    .eq("name", role["name"])\
                    .execute()
                role_id = existing.data[0]["id"]
                updated_count += 1
            else:
                result = supabase.table("roles").insert({
                    "name": role["name"],
                    "description": role["description"]
                }).execute()
                role_id = result.data[0]["id"]
                created_count += 1

            assign_permissions_to_role(supabase, role_id, role["name"], role["permissions"])
        except Exception as e:
            logger.error(f"Error processing role {role['name']}: {e}")

    logger.info(f"Roles seeded: {created_count} created, {updated_count} updated")
    return created_count + updated_count


def assign_permissions_to_role(supabase: Client, role_id: str, role_name: str, permission_names: List[str]):
    """Make the role's assignments exactly match permission_names"""
    if permission_names:
        permission_result = supabase.table("permissions")\
            .select("id")\
            .in_("name", permission_names)\
            .execute()
        permission_ids = {p["id"] for p in permission_result.data or []}
    else:
        permission_ids = set()

    existing_result = supabase.table("role_permissions")\
        .select("permission_id")\
        .eq("role_id", role_id)\
        .execute()
    existing_ids = {p["permission_id"] for p in existing_result.data or []}

    new_assignments = [
        {"role_id": role_id, "permission_id": pid}
        for pid in sorted(permission_ids - existing_ids)
    ]
    if new_assignments:
        supabase.table("role_permissions").insert(new_assignments).execute()
        logger.debug(f"Assigned {len(new_assignments)} permissions to role {role_name}")

    stale = existing_ids - permission_ids
    if stale:
        supabase.table("role_permissions")\
            .delete()\
            .eq("role_id", role_id)\
            .in_("permission_id", sorted(stale))\
            .execute()
        logger.debug(f"Removed {len(stale)} permissions from role {role_name}")


def main():
    logging.basicConfig(level=logging.INFO)
    if not settings.supabase_service_role_key:
        logger.error("SUPABASE_SERVICE_ROLE_KEY is required to seed permissions")
        sys.exit(1)
    try:
        supabase = create_supabase_clients(settings).admin
        logger.info("Starting permissions and roles seeding...")
        perm_count = seed_permissions(supabase)
        role_count = seed_roles(supabase)
        logger.info(f"Seeding completed: {perm_count} permissions, {role_count} roles processed")
    except Exception as e:
        logger.error(f"Error during seeding: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
