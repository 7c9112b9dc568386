from uuid import uuid4

import pytest
from django.apps import apps as django_apps

from apps.users.models import Account
from apps.users.principal import Principal
from apps.users.services import DiscountEligibilityTracker

pytestmark = pytest.mark.django_db


def test_new_account_is_not_eligible(guest_account):
    assert not DiscountEligibilityTracker().is_eligible(guest_account.id)


def test_unknown_or_missing_account_is_not_eligible():
    tracker = DiscountEligibilityTracker()

    assert not tracker.is_eligible(uuid4())
    assert not tracker.is_eligible(None)


def test_mark_eligible_is_idempotent(guest_account):
    tracker = DiscountEligibilityTracker()

    assert tracker.mark_eligible(guest_account.id) is True
    assert tracker.mark_eligible(guest_account.id) is False

    guest_account.refresh_from_db()
    assert guest_account.discount_eligible
    assert tracker.is_eligible(guest_account.id)


def test_marking_unknown_account_changes_nothing():
    assert DiscountEligibilityTracker().mark_eligible(uuid4()) is False


def test_principal_roles(admin_account, guest_account):
    admin = Principal.for_account(admin_account)
    guest = Principal.for_account(guest_account)

    assert admin.is_admin
    assert not guest.is_admin
    assert guest.owns(guest_account.id)
    assert not guest.owns(admin_account.id)
    assert not Principal.anonymous().owns(None)
    assert admin_account.is_admin
    assert guest_account.role == Account.RoleChoices.USER


def test_accounts_do_not_depend_on_django_auth():
    assert not django_apps.is_installed("django.contrib.auth")
    assert Account._meta.app_label == "users"
