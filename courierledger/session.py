"""Mini README: Explicit session context passed to courier-facing rollups.

Structure:
    * UserRole - admin or courier.
    * SessionContext - who is asking, handed to every call that needs it.

Nothing in the package keeps a "current user"; the interface builds a
``SessionContext`` per request and passes it down.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class UserRole(str, Enum):
    """Roles recognised by the ledger."""

    ADMIN = "admin"
    COURIER = "livreur"

    @classmethod
    def from_str(cls, value: str) -> "UserRole":
        """Coerce arbitrary casing into a valid role."""

        try:
            return cls(value.strip().lower())
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported role: {value}") from error


@dataclass(frozen=True, slots=True)
class SessionContext:
    """Identity of the caller for one request."""

    user_id: str
    role: UserRole
    courier_id: Optional[str] = None

    def __post_init__(self) -> None:
        if self.role is UserRole.COURIER and not self.courier_id:
            raise ValueError("A courier session must name its courier")

    @property
    def is_admin(self) -> bool:
        return self.role is UserRole.ADMIN

    def resolve_courier(self, requested: Optional[str] = None) -> str:
        """Return the courier this session may read.

        Couriers only see themselves; admins must say which courier they want.
        """

        if self.role is UserRole.COURIER:
            if requested and requested != self.courier_id:
                raise PermissionError(
                    f"Courier {self.courier_id} cannot read figures of courier {requested}"
                )
            return self.courier_id  # type: ignore[return-value]
        if not requested:
            raise ValueError("An admin session must name the courier to summarise")
        return requested
