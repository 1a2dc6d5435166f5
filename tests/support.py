"""In-memory stand-in for the supabase-py client used by route and guard tests.

Supports the query-builder calls the services make (select/eq/neq/in_/contains/
not_/or_/order/limit/range/insert/update/upsert/delete/execute) and the auth
calls (get_user, sign_in_with_password, admin.*). Rows are plain dicts; the
selected column list is ignored and whole rows are returned.
"""

import copy
import uuid
from datetime import datetime, timezone
from types import SimpleNamespace


ADMIN_ID = "00000000-0000-4000-8000-000000000001"
RESELLER_ID = "00000000-0000-4000-8000-000000000002"
OTHER_RESELLER_ID = "00000000-0000-4000-8000-000000000003"
CONSUMER_ID = "00000000-0000-4000-8000-000000000004"
OTHER_CONSUMER_ID = "00000000-0000-4000-8000-000000000005"
VIEWER_ID = "00000000-0000-4000-8000-000000000006"
DEACTIVATED_ID = "00000000-0000-4000-8000-000000000007"
MISSING_ID = "00000000-0000-4000-8000-0000000000ff"

BRAND_ID = "10000000-0000-4000-8000-000000000001"
OTHER_BRAND_ID = "10000000-0000-4000-8000-000000000002"
PRODUCT_ID = "20000000-0000-4000-8000-000000000001"


def _as_list(value):
    if value is None:
        return []
    return list(value) if isinstance(value, (list, tuple, set)) else [value]


class FakeResponse:
    def __init__(self, data, count=None):
        self.data = data
        self.count = count


class FakeQuery:
    def __init__(self, db, table):
        self.db = db
        self.table_name = table
        self.filters = []
        self.action = "select"
        self.payload = None
        self.on_conflict = None
        self.want_count = False
        self.order_by = None
        self.limit_to = None
        self.window = None
        self._negate_next = False

    # -- verbs --------------------------------------------------------------

    def select(self, columns="*", count=None):
        self.action = "select"
        self.want_count = count is not None
        return self

    def insert(self, payload):
        self.action, self.payload = "insert", payload
        return self

    def upsert(self, payload, on_conflict=None):
        self.action, self.payload, self.on_conflict = "upsert", payload, on_conflict
        return self

    def update(self, payload):
        self.action, self.payload = "update", payload
        return self

    def delete(self):
        self.action = "delete"
        return self

    # -- filters ------------------------------------------------------------

    def _add(self, predicate):
        if self._negate_next:
            self._negate_next = False
            self.filters.append(lambda row: not predicate(row))
        else:
            self.filters.append(predicate)
        return self

    @property
    def not_(self):
        self._negate_next = True
        return self

    def eq(self, column, value):
        return self._add(lambda row: row.get(column) == value)

    def neq(self, column, value):
        return self._add(lambda row: row.get(column) != value)

    def in_(self, column, values):
        values = list(values)
        return self._add(lambda row: row.get(column) in values)

    def contains(self, column, values):
        return self._add(lambda row: all(v in _as_list(row.get(column)) for v in values))

    def or_(self, expression):
        clauses = []
        for clause in expression.split(","):
            column, operator, pattern = clause.split(".", 2)
            assert operator == "ilike"
            clauses.append((column, pattern.strip("%").lower()))
        return self._add(
            lambda row: any(term in str(row.get(column) or "").lower() for column, term in clauses)
        )

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def limit(self, count):
        self.limit_to = count
        return self

    def range(self, start, end):
        self.window = (start, end)
        return self

    # -- execution ------------------------------------------------------------

    def _matches(self, row):
        return all(predicate(row) for predicate in self.filters)

    def execute(self):
        if self.table_name in self.db.failing_tables or (self.table_name, self.action) in self.db.failing_writes:
            raise RuntimeError(f"{self.table_name} is unavailable")
        self.db.calls.append((self.table_name, self.action))
        rows = self.db.tables.setdefault(self.table_name, [])

        if self.action == "select":
            matched = [row for row in rows if self._matches(row)]
            if self.order_by:
                column, desc = self.order_by
                matched.sort(key=lambda row: str(row.get(column) or ""), reverse=desc)
            total = len(matched)
            if self.window:
                matched = matched[self.window[0]:self.window[1] + 1]
            if self.limit_to is not None:
                matched = matched[:self.limit_to]
            return FakeResponse(copy.deepcopy(matched), total if self.want_count else None)

        if self.action in ("insert", "upsert"):
            created = []
            for item in _as_list(self.payload):
                item = dict(item)
                existing = None
                if self.action == "upsert" and self.on_conflict:
                    existing = next(
                        (row for row in rows if row.get(self.on_conflict) == item.get(self.on_conflict)),
                        None,
                    )
                if existing is not None:
                    existing.update(item)
                    created.append(copy.deepcopy(existing))
                    continue
                if self.table_name != "profiles":
                    item.setdefault("id", str(uuid.uuid4()))
                item.setdefault("created_at", datetime.now(timezone.utc).isoformat())
                rows.append(item)
                created.append(copy.deepcopy(item))
            return FakeResponse(created)

        if self.action == "update":
            updated = []
            for row in rows:
                if self._matches(row):
                    row.update(self.payload)
                    updated.append(copy.deepcopy(row))
            return FakeResponse(updated)

        if self.action == "delete":
            removed = [row for row in rows if self._matches(row)]
            self.db.tables[self.table_name] = [row for row in rows if not self._matches(row)]
            return FakeResponse(copy.deepcopy(removed))

        raise AssertionError(f"unsupported action {self.action}")


class FakeAuthAdmin:
    def __init__(self, db):
        self.db = db

    def create_user(self, attributes):
        email = attributes["email"]
        if any(user.email == email for user in self.db.users.values()):
            raise RuntimeError("A user with this email address has already been registered")
        user = SimpleNamespace(id=str(uuid.uuid4()), email=email, user_metadata=attributes.get("user_metadata", {}))
        self.db.users[user.id] = user
        self.db.passwords[user.id] = attributes.get("password")
        return SimpleNamespace(user=user)

    def delete_user(self, user_id):
        self.db.users.pop(user_id, None)
        self.db.deleted_auth_users.append(user_id)

    def get_user_by_id(self, user_id):
        user = self.db.users.get(user_id)
        if user is None:
            raise RuntimeError("User not found")
        return SimpleNamespace(user=user)

    def update_user_by_id(self, user_id, attributes):
        if user_id not in self.db.users:
            raise RuntimeError("User not found")
        if "password" in attributes:
            self.db.passwords[user_id] = attributes["password"]
        return SimpleNamespace(user=self.db.users[user_id])

    def sign_out(self, jwt, scope="global"):
        self.db.tokens.pop(jwt, None)


class FakeAuth:
    def __init__(self, db):
        self.db = db
        self.admin = FakeAuthAdmin(db)

    def get_user(self, jwt=None):
        user_id = self.db.tokens.get(jwt)
        if user_id is None:
            raise RuntimeError("invalid JWT: unable to parse or verify signature")
        user = self.db.users.get(user_id) or SimpleNamespace(id=user_id, email=None)
        return SimpleNamespace(user=SimpleNamespace(
            id=user.id, email=user.email, user_metadata={}, app_metadata={},
        ))

    def sign_in_with_password(self, credentials):
        for user_id, user in self.db.users.items():
            if user.email == credentials["email"] and self.db.passwords.get(user_id) == credentials["password"]:
                token = self.db.issue_token(user_id)
                return SimpleNamespace(user=user, session=SimpleNamespace(access_token=token))
        raise RuntimeError("Invalid login credentials")


class FakeSupabase:
    def __init__(self):
        self.tables = {}
        self.users = {}
        self.passwords = {}
        self.tokens = {}
        self.calls = []
        self.deleted_auth_users = []
        self.failing_tables = set()
        # (table, action) pairs that raise, e.g. ("profiles", "upsert")
        self.failing_writes = set()
        self.auth = FakeAuth(self)

    def table(self, name):
        return FakeQuery(self, name)

    def issue_token(self, user_id):
        token = f"token-{user_id}"
        self.tokens[token] = user_id
        return token

    def add_profile(self, user_id, roles, email=None, referred_by=None,
                    account_status="active", is_systemadmin=False, **extra):
        email = email or f"{user_id[-4:]}@example.com"
        self.users[user_id] = SimpleNamespace(id=user_id, email=email, user_metadata={})
        profile = {
            "user_id": user_id,
            "email": email,
            "full_name": extra.pop("full_name", f"Account {user_id[-4:]}"),
            "role": roles,
            "account_status": account_status,
            "is_systemadmin": is_systemadmin,
            "referred_by": referred_by,
            "created_at": extra.pop("created_at", datetime.now(timezone.utc).isoformat()),
        }
        profile.update(extra)
        self.tables.setdefault("profiles", []).append(profile)
        return profile

    def headers_for(self, user_id):
        return {"Authorization": f"Bearer {self.issue_token(user_id)}"}

    def rows(self, table):
        return self.tables.get(table, [])

    def row(self, table, column, value):
        return next((row for row in self.rows(table) if row.get(column) == value), None)
