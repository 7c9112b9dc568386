"""Caller principal handed in by the (external) authentication layer."""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from .models import Account


@dataclass(frozen=True)
class Principal:
    """Identity and role of whoever invokes a booking operation.

    ``account_id`` is ``None`` for a caller identified only by the contact
    details in the request.
    """

    account_id: UUID | None
    role: str = Account.RoleChoices.USER

    @classmethod
    def for_account(cls, account: Account) -> "Principal":
        return cls(account_id=account.id, role=account.role)

    @classmethod
    def anonymous(cls) -> "Principal":
        return cls(account_id=None)

    @property
    def is_admin(self) -> bool:
        return self.role == Account.RoleChoices.ADMIN

    def owns(self, account_id: UUID | None) -> bool:
        return self.account_id is not None and self.account_id == account_id
