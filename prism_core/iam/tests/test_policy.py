from types import SimpleNamespace

import pytest
from rest_framework.exceptions import PermissionDenied

from prism_core.common.errors import ScopeViolation
from prism_core.iam import policy
from prism_core.iam.identity import RoleIdentity


def test_admin_holds_every_category():
    assert policy.ROLE_ACCESS["admin"] == policy.ALL_CATEGORIES


@pytest.mark.parametrize("role", policy.LAB_ROLES)
def test_lab_roles_own_their_lab_and_only_lab_categories(role):
    identity = RoleIdentity(role=role)
    assert identity.own_lab == role
    assert identity.categories == {policy.ACCEPTANCE_WRITE, policy.RESULTS_WRITE}


def test_role_tables_are_frozen():
    with pytest.raises(TypeError):
        policy.ROLE_ACCESS["resident"] = frozenset()
    with pytest.raises(TypeError):
        policy.ROLE_LAB["fish"] = "fcm"


def test_authorize_allows_on_any_intersection():
    policy.authorize(RoleIdentity(role="consultant"), {policy.VISIT_WRITE, policy.READ_ONLY})


def test_authorize_denies_without_intersection():
    with pytest.raises(PermissionDenied):
        policy.authorize(RoleIdentity(role="consultant"), {policy.VISIT_WRITE})


def test_unknown_role_has_no_categories():
    assert not policy.is_permitted("janitor", policy.ALL_CATEGORIES)


def test_lab_scope_rejects_foreign_lab():
    with pytest.raises(ScopeViolation) as exc:
        policy.assert_lab_scope(RoleIdentity(role="fish"), "fcm")
    assert exc.value.details == {"own_lab": "fish", "lab_kind": "fcm"}


def test_lab_scope_admin_writes_anywhere():
    for lab in policy.LAB_ROLES:
        policy.assert_lab_scope(RoleIdentity(role="admin"), lab)


def test_policy_reads_scope_and_categories_from_the_identity():
    identity = SimpleNamespace(role="fish", is_admin=False, own_lab="fcm", categories=frozenset({policy.READ_ONLY}))
    policy.assert_lab_scope(identity, "fcm")
    policy.authorize(identity, {policy.READ_ONLY})
    with pytest.raises(PermissionDenied):
        policy.authorize(identity, {policy.RESULTS_WRITE})
