"""
Firewall Rule Models - Local and remote representations of a firewall rule.

A firewall rule matches traffic through a previously created filter
(match expression) and applies an action to it. The desired and local
shapes are owned by the host; the remote shape is what the remote
service client sends and receives.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional


class FirewallRuleAction(Enum):
    """Actions a firewall rule can apply to matched traffic."""

    BLOCK = "block"
    CHALLENGE = "challenge"
    ALLOW = "allow"
    JS_CHALLENGE = "js_challenge"
    MANAGED_CHALLENGE = "managed_challenge"
    LOG = "log"
    BYPASS = "bypass"


class FirewallRuleProduct(Enum):
    """Security products a bypass rule can skip."""

    ZONE_LOCKDOWN = "zoneLockdown"
    UA_BLOCK = "uaBlock"
    BIC = "bic"
    HOT = "hot"
    SECURITY_LEVEL = "securityLevel"
    RATE_LIMIT = "rateLimit"
    WAF = "waf"


@dataclass(frozen=True)
class DesiredState:
    """Configuration the host wants reflected remotely."""

    zone_id: str
    filter_id: str
    action: FirewallRuleAction
    description: Optional[str] = None
    paused: bool = False
    priority: Optional[int] = None
    products: Optional[FrozenSet[str]] = None

    def __post_init__(self):
        # The service stores empty text and empty product lists as absent
        if self.description == "":
            object.__setattr__(self, "description", None)
        if self.products is not None and not self.products:
            object.__setattr__(self, "products", None)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DesiredState":
        """
        Build a desired state from a (validated) document.

        Empty descriptions and product lists are treated as absent.

        Args:
            data: Mapping with the rule's fields, as read from YAML or JSON.

        Returns:
            A new DesiredState instance.
        """
        products = data.get("products")
        return cls(
            zone_id=data["zone_id"],
            filter_id=data["filter_id"],
            action=FirewallRuleAction(data["action"]),
            description=data.get("description"),
            paused=bool(data.get("paused", False)),
            priority=data.get("priority"),
            products=frozenset(products) if products is not None else None,
        )


@dataclass(frozen=True)
class LocalState(DesiredState):
    """
    Host-side mirror of a bound remote rule.

    A LocalState always carries the remote id; an unbound record is
    represented by the absence of a LocalState.
    """

    id: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Render the state as a plain, serializable dict."""
        return {
            "id": self.id,
            "zone_id": self.zone_id,
            "filter_id": self.filter_id,
            "action": self.action.value,
            "description": self.description,
            "paused": self.paused,
            "priority": self.priority,
            "products": sorted(self.products) if self.products is not None else None,
        }


@dataclass(frozen=True)
class FilterRef:
    """Reference to a separately managed filter."""

    id: str = ""


@dataclass
class RemoteRecord:
    """A firewall rule as represented by the remote service."""

    id: str = ""
    paused: bool = False
    description: str = ""
    action: str = ""
    priority: Optional[int] = None
    filter: FilterRef = field(default_factory=FilterRef)
    products: List[str] = field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        """
        Format the record as a JSON request body.

        Every field is sent; an empty id is omitted because the service
        assigns it on creation.
        """
        payload: Dict[str, Any] = {
            "paused": self.paused,
            "description": self.description,
            "action": self.action,
            "priority": self.priority,
            "filter": {"id": self.filter.id},
            "products": list(self.products),
        }
        if self.id:
            payload["id"] = self.id
        return payload

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "RemoteRecord":
        """
        Create a record from a JSON response object.

        Args:
            payload: A single rule object from the service's ``result``.

        Returns:
            A new RemoteRecord instance.
        """
        filter_data = payload.get("filter") or {}
        return cls(
            id=payload.get("id") or "",
            paused=bool(payload.get("paused", False)),
            description=payload.get("description") or "",
            action=payload.get("action") or "",
            priority=payload.get("priority"),
            filter=FilterRef(id=filter_data.get("id") or ""),
            products=list(payload.get("products") or []),
        )
