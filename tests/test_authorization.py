"""Resource guard: admin-or-owner decisions over fetched rows."""

import pytest

from app.core.authorization import (
    BRANDS, CONSUMERS, PRODUCTS, RESELLERS, USERS, AccessDecision, Actor, DenyReason, Operation,
    authorize, evaluate_access,
)
from app.core.roles import AccountStatus, Role
from tests.support import (
    ADMIN_ID, BRAND_ID, CONSUMER_ID, DEACTIVATED_ID, MISSING_ID, OTHER_BRAND_ID, OTHER_CONSUMER_ID,
    OTHER_RESELLER_ID, PRODUCT_ID, RESELLER_ID, VIEWER_ID,
)

ADMIN = Actor(id=ADMIN_ID, roles=[Role.ADMIN])
RESELLER = Actor(id=RESELLER_ID, roles=[Role.RESELLER])
SYSTEM_ADMIN = Actor(id="sys", roles=[Role.USER], is_systemadmin=True)
DEACTIVATED_ADMIN = Actor(id=ADMIN_ID, roles=[Role.ADMIN], account_status=AccountStatus.DEACTIVE)


# -- pure decision ----------------------------------------------------------------

def test_owner_may_act_on_own_brand():
    decision = evaluate_access(RESELLER, {"id": BRAND_ID, "owner_user_id": RESELLER_ID}, BRANDS)
    assert decision.allowed
    assert decision.actor == RESELLER


def test_non_owner_is_forbidden():
    decision = evaluate_access(RESELLER, {"id": OTHER_BRAND_ID, "owner_user_id": OTHER_RESELLER_ID}, BRANDS)
    assert decision == AccessDecision.deny(DenyReason.FORBIDDEN, RESELLER)
    assert decision.http_status == 403


def test_admin_may_act_on_any_record():
    assert evaluate_access(ADMIN, {"id": OTHER_BRAND_ID, "owner_user_id": OTHER_RESELLER_ID}, BRANDS).allowed
    assert evaluate_access(SYSTEM_ADMIN, {"id": PRODUCT_ID}, PRODUCTS).allowed


def test_missing_actor_is_unauthenticated():
    decision = evaluate_access(None, {"id": BRAND_ID, "owner_user_id": RESELLER_ID}, BRANDS)
    assert decision.reason == DenyReason.UNAUTHENTICATED
    assert decision.http_status == 401


def test_missing_record_is_not_found_even_for_admin():
    decision = evaluate_access(ADMIN, None, BRANDS)
    assert decision.reason == DenyReason.NOT_FOUND
    assert decision.http_status == 404


def test_deactivated_actor_is_forbidden_before_anything_else():
    decision = evaluate_access(DEACTIVATED_ADMIN, None, BRANDS)
    assert decision.reason == DenyReason.FORBIDDEN


def test_null_owner_matches_nobody():
    assert not evaluate_access(RESELLER, {"id": BRAND_ID, "owner_user_id": None}, BRANDS).allowed


def test_kinds_without_ownership_are_admin_only():
    assert not evaluate_access(RESELLER, {"id": PRODUCT_ID}, PRODUCTS).allowed
    assert not evaluate_access(RESELLER, {"user_id": RESELLER_ID}, USERS).allowed
    assert evaluate_access(ADMIN, {"user_id": RESELLER_ID}, USERS).allowed


def test_profile_without_the_kind_role_is_not_found():
    reseller_row = {"user_id": RESELLER_ID, "referred_by": ADMIN_ID, "role": ["reseller"]}
    decision = evaluate_access(ADMIN, reseller_row, CONSUMERS)
    assert decision.reason == DenyReason.NOT_FOUND


def test_referrer_owns_consumer_with_legacy_role_value():
    consumer_row = {"user_id": CONSUMER_ID, "referred_by": RESELLER_ID, "role": "consumer"}
    assert evaluate_access(RESELLER, consumer_row, CONSUMERS).allowed


# -- datastore-backed decision -------------------------------------------------------

async def test_authorize_owner_reads_brand(db):
    decision = await authorize(db, RESELLER_ID, BRANDS, BRAND_ID, Operation.READ)
    assert decision.allowed
    assert decision.actor.id == RESELLER_ID


async def test_authorize_non_owner_denied(db):
    decision = await authorize(db, RESELLER_ID, BRANDS, OTHER_BRAND_ID, Operation.UPDATE)
    assert decision.reason == DenyReason.FORBIDDEN


async def test_authorize_unknown_actor(db):
    decision = await authorize(db, MISSING_ID, BRANDS, BRAND_ID, Operation.READ)
    assert decision.reason == DenyReason.UNAUTHENTICATED


async def test_authorize_without_actor_id_skips_lookups(db):
    decision = await authorize(db, None, BRANDS, BRAND_ID, Operation.READ)
    assert decision.reason == DenyReason.UNAUTHENTICATED
    assert db.calls == []


async def test_authorize_unknown_record(db):
    decision = await authorize(db, ADMIN_ID, BRANDS, MISSING_ID, Operation.DELETE)
    assert decision.reason == DenyReason.NOT_FOUND


async def test_authorize_deactivated_actor(db):
    decision = await authorize(db, DEACTIVATED_ID, BRANDS, BRAND_ID, Operation.READ)
    assert decision.reason == DenyReason.FORBIDDEN


async def test_authorize_legacy_scalar_role_actor(db):
    decision = await authorize(db, VIEWER_ID, CONSUMERS, CONSUMER_ID, Operation.READ)
    assert decision.reason == DenyReason.FORBIDDEN
    assert decision.actor.roles == [Role.VIEWER]


async def test_authorize_reseller_chain(db):
    assert (await authorize(db, RESELLER_ID, CONSUMERS, CONSUMER_ID, Operation.READ)).allowed
    assert not (await authorize(db, RESELLER_ID, CONSUMERS, OTHER_CONSUMER_ID, Operation.READ)).allowed
    # ADMIN referred RESELLER, but admin access does not depend on that
    assert (await authorize(db, ADMIN_ID, RESELLERS, OTHER_RESELLER_ID, Operation.READ)).allowed


async def test_failed_lookup_denies(db):
    db.failing_tables.add("brands")
    decision = await authorize(db, ADMIN_ID, BRANDS, BRAND_ID, Operation.READ)
    assert decision.reason == DenyReason.NOT_FOUND


async def test_failed_actor_lookup_denies(db):
    db.failing_tables.add("profiles")
    decision = await authorize(db, ADMIN_ID, BRANDS, BRAND_ID, Operation.READ)
    assert decision.reason == DenyReason.UNAUTHENTICATED


@pytest.mark.parametrize("operation", list(Operation))
async def test_every_operation_uses_the_same_rule(db, operation):
    assert (await authorize(db, RESELLER_ID, BRANDS, BRAND_ID, operation)).allowed
    assert not (await authorize(db, RESELLER_ID, BRANDS, OTHER_BRAND_ID, operation)).allowed
