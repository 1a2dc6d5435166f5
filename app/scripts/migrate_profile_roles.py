"""
Migrate Profile Roles Script
Rewrites legacy single-value profiles.role entries (e.g. "admin") as role
lists (["admin"]) so every profile stores the same shape.
Run with: python -m app.scripts.migrate_profile_roles
"""

import logging
import sys
from typing import Any, List, Optional

from supabase import Client

from app.config import settings
from app.core.roles import normalize_roles, roles_to_storage
from app.database.supabase_client import create_supabase_clients

logger = logging.getLogger(__name__)

BATCH_SIZE = 500


def migrated_role(value: Any) -> Optional[List[str]]:
    """The list to store for a role value, or None when it is already a list"""
    if isinstance(value, list):
        return None
    roles = roles_to_storage(normalize_roles(value))
    if value and not roles:
        logger.warning(f"Unknown role value {value!r} dropped")
    return roles


def migrate_roles(supabase: Client) -> int:
    """Convert every scalar role value; returns the number of profiles rewritten"""
    logger.info("Migrating profile roles...")
    migrated_count = 0
    offset = 0

    while True:
        result = supabase.table("profiles")\
            .select("user_id, role")\
            .order("user_id")\
            .range(offset, offset + BATCH_SIZE - 1)\
            .execute()
        rows = result.data or []

        for row in rows:
            roles = migrated_role(row.get("role"))
            if roles is None:
                continue
            try:
                supabase.table("profiles")\
                    .update({"role": roles})\
                    .eq("user_id", row["user_id"])\
                    .execute()
                migrated_count += 1
                logger.debug(f"Migrated {row['user_id']}: {row.get('role')!r} -> {roles}")
            except Exception as e:
                logger.error(f"Error migrating roles for {row['user_id']}: {e}")

        if len(rows) < BATCH_SIZE:
            break
        offset += BATCH_SIZE

    logger.info(f"Profile roles migrated: {migrated_count} rewritten")
    return migrated_count


def main():
    logging.basicConfig(level=logging.INFO)
    if not settings.supabase_service_role_key:
        logger.error("SUPABASE_SERVICE_ROLE_KEY is required to migrate profiles")
        sys.exit(1)
    try:
        migrate_roles(create_supabase_clients(settings).admin)
    except Exception as e:
        logger.error(f"Error during role migration: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
