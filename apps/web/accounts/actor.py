"""
Caller identity passed explicitly into every service operation.

Views build an Actor from request.user once; services never look at the
request, so they can be exercised without a simulated request context.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .models import Role

if TYPE_CHECKING:
    from .models import Account


@dataclass(frozen=True)
class Actor:
    """An authenticated caller: account id plus role."""

    account_id: int
    role: str

    @classmethod
    def from_account(cls, account: "Account") -> "Actor":
        return cls(account_id=account.pk, role=account.role)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def owns(self, account_id: int) -> bool:
        """Check if this actor is the given account."""
        return self.account_id == account_id
