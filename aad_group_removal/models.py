"""Request and result records exchanged with the hosting job runner."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .errors import ConfigurationError, MissingParameterError

NO_ADDRESS_MESSAGE = "No URL specified. Provide either address parameter or ADDRESS environment variable"


@dataclass(frozen=True)
class RemovalRequest:
    user_principal_name: str
    group_id: str
    base_address: str

    @classmethod
    def from_params(cls, params: Mapping[str, Any], default_address: Optional[str] = None) -> "RemovalRequest":
        """Validate job parameters; raises before any network I/O."""
        user_principal_name = params.get("userPrincipalName")
        if not user_principal_name:
            raise MissingParameterError("userPrincipalName")

        group_id = params.get("groupId")
        if not group_id:
            raise MissingParameterError("groupId")

        address = params.get("address") or default_address
        if not address:
            raise ConfigurationError(NO_ADDRESS_MESSAGE)

        return cls(
            user_principal_name=user_principal_name,
            group_id=group_id,
            base_address=address.rstrip("/"),
        )


@dataclass(frozen=True)
class ResolvedUser:
    directory_object_id: str
    data: Dict[str, Any] = field(default_factory=dict, repr=False)


@dataclass(frozen=True)
class RemovalResult:
    user_principal_name: str
    group_id: str
    user_id: str
    removed: bool
    status: str = "success"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "userPrincipalName": self.user_principal_name,
            "groupId": self.group_id,
            "userId": self.user_id,
            "removed": self.removed,
        }
