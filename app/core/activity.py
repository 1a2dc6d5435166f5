"""
Audit trail of create, update and delete operations.

Each call writes one activity_logs row through the service-role client.
A failed write is logged and never fails the request that triggered it.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from supabase import Client

from app.core.authorization import Actor
from app.core.roles import roles_to_storage
from app.core.validation import sanitize_record

logger = logging.getLogger(__name__)

ACTIVITY_TABLE = "activity_logs"


class ActivityAction(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class ActivityLogger:
    admin_supabase: Client
    actor: Optional[Actor] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None

    def log(
        self,
        action: ActivityAction,
        table_name: str,
        target_id: Optional[str],
        changed_fields: Optional[Dict[str, Any]] = None,
    ) -> bool:
        """Record one operation; returns False when the row could not be written"""
        entry = {
            "actor_id": self.actor.id if self.actor else None,
            "actor_role": roles_to_storage(self.actor.roles) if self.actor else None,
            "target_id": target_id,
            "action_type": action.value,
            "table_name": table_name,
            "changed_fields": sanitize_record(changed_fields) or None,
            "ip_address": self.ip_address,
            "user_agent": self.user_agent,
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        try:
            self.admin_supabase.table(ACTIVITY_TABLE).insert(entry).execute()
        except Exception as e:
            logger.error(f"Error logging {action.value} on {table_name} {target_id}: {e}")
            return False
        logger.debug(f"Activity logged: {action.value} on {table_name} by {entry['actor_id']}")
        return True
