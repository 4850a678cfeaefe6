"""
Error taxonomy for firewall rule reconciliation.

Remote service clients raise RemoteServiceError with a kind set at their
boundary. The lifecycle controller matches on that kind and raises the
FirewallRuleError subclasses below to the host.
"""

from enum import Enum
from typing import Optional


_PROGRESSIVE = {
    "create": "creating",
    "read": "reading",
    "update": "updating",
    "delete": "deleting",
}


class RemoteErrorKind(Enum):
    """Classification of a remote service failure."""

    NOT_FOUND = "not_found"
    OTHER = "other"


class RemoteServiceError(Exception):
    """Failure reported by a remote service client."""

    def __init__(
        self,
        message: str,
        kind: RemoteErrorKind = RemoteErrorKind.OTHER,
        status: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.status = status

    @property
    def is_not_found(self) -> bool:
        return self.kind is RemoteErrorKind.NOT_FOUND


class FirewallRuleError(Exception):
    """Base class for lifecycle failures surfaced to the host."""


class ContractViolationError(FirewallRuleError):
    """The remote service reported success but returned no identifying data."""

    def __init__(self, operation: str):
        super().__init__(
            f"failed to find id in {operation.capitalize()} response; "
            "resource was empty"
        )
        self.operation = operation


class RemoteOperationError(FirewallRuleError):
    """A remote call failed; carries the operation and scope it failed in."""

    def __init__(
        self,
        operation: str,
        zone_id: str,
        rule_id: Optional[str],
        cause: RemoteServiceError,
    ):
        verb = _PROGRESSIVE.get(operation, operation)
        if rule_id:
            message = (
                f"error {verb} Firewall Rule {rule_id!r} "
                f"for zone {zone_id!r}: {cause}"
            )
        else:
            message = f"error {verb} Firewall Rule for zone {zone_id!r}: {cause}"
        super().__init__(message)
        self.operation = operation
        self.zone_id = zone_id
        self.rule_id = rule_id
        self.cause = cause


class MalformedImportTokenError(FirewallRuleError, ValueError):
    """An import token did not split into a zone id and a rule id."""

    def __init__(self, token: str):
        super().__init__(
            f'invalid id ("{token}") specified, should be in format "zoneID/ruleID"'
        )
        self.token = token
