"""Tests for the authorization gate."""

from uuid import uuid4

import pytest

from snack_club.domain.errors import DenyReason, NotAuthorizedError
from snack_club.domain.models import Role
from snack_club.services.authorization import (
    Action,
    Decision,
    authorize,
    ensure_allowed,
)
from tests.conftest import make_profile

ADMIN_ONLY_ACTIONS = [
    Action.LIST_MEMBERS,
    Action.LIST_ALL_REQUESTS,
    Action.TRANSITION_REQUEST,
    Action.RECORD_PAYMENT,
    Action.ADD_CATALOG_ITEM,
]


def test_member_can_read_own_data() -> None:
    member = make_profile()

    assert authorize(member, Action.READ_SUBSCRIPTION, member.id).allowed
    assert authorize(member, Action.READ_REQUESTS).allowed
    assert authorize(member, Action.CREATE_REQUEST, member.id).allowed
    assert authorize(member, Action.UPDATE_SUBSCRIPTION, member.id).allowed


def test_member_cannot_read_other_members() -> None:
    member = make_profile()

    decision = authorize(member, Action.READ_SUBSCRIPTION, uuid4())

    assert not decision.allowed
    assert decision.reason is DenyReason.INSUFFICIENT_ROLE
    assert decision.message


@pytest.mark.parametrize("action", ADMIN_ONLY_ACTIONS)
def test_admin_only_actions_are_denied_to_members(action: Action) -> None:
    member = make_profile()

    decision = authorize(member, action)

    assert not decision.allowed
    assert decision.reason is DenyReason.INSUFFICIENT_ROLE


@pytest.mark.parametrize("action", ADMIN_ONLY_ACTIONS)
def test_admin_only_actions_are_allowed_to_admins(action: Action) -> None:
    admin = make_profile(role=Role.ADMIN)

    assert authorize(admin, action).allowed


def test_admin_can_touch_other_members_subscription() -> None:
    admin = make_profile(role=Role.ADMIN)

    assert authorize(admin, Action.READ_SUBSCRIPTION, uuid4()).allowed
    assert authorize(admin, Action.UPDATE_SUBSCRIPTION, uuid4()).allowed


def test_admin_on_own_record_takes_self_service_path() -> None:
    admin = make_profile(role=Role.ADMIN)

    assert authorize(admin, Action.UPDATE_SUBSCRIPTION, admin.id).allowed
    assert authorize(admin, Action.RECORD_PAYMENT, admin.id).allowed


def test_nobody_updates_someone_elses_profile() -> None:
    admin = make_profile(role=Role.ADMIN)

    decision = authorize(admin, Action.UPDATE_PROFILE, uuid4())

    assert not decision.allowed
    assert decision.reason is DenyReason.NOT_OWNER


def test_create_request_for_someone_else_is_denied() -> None:
    member = make_profile()

    decision = authorize(member, Action.CREATE_REQUEST, uuid4())

    assert decision.reason is DenyReason.NOT_OWNER


def test_ensure_allowed_raises_with_reason() -> None:
    decision = Decision.deny(DenyReason.NOT_OWNER, "Nope.")

    with pytest.raises(NotAuthorizedError) as excinfo:
        ensure_allowed(decision)

    assert excinfo.value.reason is DenyReason.NOT_OWNER
    assert excinfo.value.message == "Nope."


def test_ensure_allowed_passes_allowed_decisions() -> None:
    ensure_allowed(Decision.allow())
