"""
Unit tests for the access-control gate: the policy table and its evaluation.
"""

import uuid

import pytest

from app.core import access
from app.core.access import POLICY, DenyReason, Operation, Role, Scope
from app.core.errors import Forbidden, NotFound, Unauthenticated
from app.core.security import Principal


def actor(role: Role) -> Principal:
    return Principal(user_id=uuid.uuid4(), role=role)


# ── Policy table ─────────────────────────────────────────────────────

def test_every_operation_has_a_policy_row():
    assert set(POLICY) == set(Operation)


def test_only_providers_author_clinical_events():
    for op in (Operation.VACCINATION_CREATE, Operation.VACCINATION_UPDATE, Operation.MEDICAL_RECORD_CREATE):
        assert POLICY[op] == {Role.HEALTHCARE_PROVIDER: Scope.ANY}


def test_statistics_are_provider_only():
    for op in (Operation.VACCINATION_STATS, Operation.NCD_PATIENT_STATS, Operation.VACCINATION_UPCOMING):
        assert set(POLICY[op]) == {Role.HEALTHCARE_PROVIDER}


def test_babies_are_created_by_parents_only():
    assert POLICY[Operation.BABY_CREATE] == {Role.PARENT: Scope.OWN}


# ── check_role ───────────────────────────────────────────────────────

def test_check_role_without_actor_is_unauthenticated():
    decision = access.check_role(None, Operation.BABY_READ)
    assert not decision
    assert decision.reason is DenyReason.UNAUTHENTICATED


@pytest.mark.parametrize("role,op", [
    (Role.NCD_PATIENT, Operation.BABY_READ),
    (Role.PARENT, Operation.VACCINATION_CREATE),
    (Role.PARENT, Operation.NCD_PATIENT_READ),
    (Role.NCD_PATIENT, Operation.MEDICAL_RECORD_CREATE),
    (Role.PARENT, Operation.VACCINATION_STATS),
])
def test_check_role_denies_roles_missing_from_table(role, op):
    decision = access.check_role(actor(role), op)
    assert decision.allowed is False
    assert decision.reason is DenyReason.INSUFFICIENT_ROLE


def test_check_role_reports_scope():
    assert access.check_role(actor(Role.PARENT), Operation.BABY_LIST).scope is Scope.OWN
    assert access.check_role(actor(Role.HEALTHCARE_PROVIDER), Operation.BABY_LIST).scope is Scope.ANY


# ── authorize ────────────────────────────────────────────────────────

def test_owner_is_allowed():
    parent = actor(Role.PARENT)
    assert access.authorize(parent, Operation.BABY_UPDATE, parent.user_id).allowed


def test_other_owner_is_denied_not_owner():
    parent = actor(Role.PARENT)
    decision = access.authorize(parent, Operation.BABY_DELETE, uuid.uuid4())
    assert decision.allowed is False
    assert decision.reason is DenyReason.NOT_OWNER


def test_missing_owner_fails_closed_for_owned_scope():
    parent = actor(Role.PARENT)
    decision = access.authorize(parent, Operation.BABY_READ, None)
    assert decision.reason is DenyReason.NOT_OWNER


def test_privileged_role_ignores_ownership():
    nurse = actor(Role.HEALTHCARE_PROVIDER)
    assert access.authorize(nurse, Operation.BABY_READ, uuid.uuid4()).allowed
    assert access.authorize(nurse, Operation.NCD_PATIENT_UPDATE, uuid.uuid4()).allowed


def test_role_check_wins_over_ownership():
    parent = actor(Role.PARENT)
    decision = access.authorize(parent, Operation.VACCINATION_CREATE, parent.user_id)
    assert decision.reason is DenyReason.INSUFFICIENT_ROLE


def test_unknown_operation_is_denied():
    class Fake:
        user_id = uuid.uuid4()
        role = Role.HEALTHCARE_PROVIDER
    decision = access.check_role(Fake(), "baby:teleport")
    assert decision.reason is DenyReason.INSUFFICIENT_ROLE


# ── enforce ──────────────────────────────────────────────────────────

def test_enforce_passes_allowed_decision_through():
    decision = access.check_role(actor(Role.PARENT), Operation.BABY_CREATE)
    assert access.enforce(decision) is decision


def test_enforce_maps_denials_to_errors():
    with pytest.raises(Unauthenticated):
        access.enforce(access.check_role(None, Operation.BABY_READ))
    with pytest.raises(NotFound, match="Baby not found"):
        access.enforce(access.not_found(), "Baby")
    with pytest.raises(Forbidden) as exc:
        access.enforce(access.authorize(actor(Role.PARENT), Operation.BABY_READ, uuid.uuid4()))
    assert exc.value.reason == "NotOwner"
    assert exc.value.status_code == 403
