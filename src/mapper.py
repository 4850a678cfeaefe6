"""
Field Mapper - Pure translation between local and remote rule shapes.

The mapping never merges with prior remote state: whatever is absent from
the desired state is written as the remote zero value.
"""

from typing import Union

from models import DesiredState, FilterRef, FirewallRuleAction, LocalState, RemoteRecord


def to_remote(desired: Union[DesiredState, LocalState]) -> RemoteRecord:
    """
    Translate desired state into a remote record.

    A LocalState carries its id into the record; a plain DesiredState
    produces a record without one.

    Args:
        desired: The desired (or bound local) state.

    Returns:
        A RemoteRecord ready to send to the remote service.
    """
    record = RemoteRecord(
        id=getattr(desired, "id", ""),
        paused=desired.paused,
        action=desired.action.value,
        filter=FilterRef(id=desired.filter_id),
    )

    if desired.description is not None:
        record.description = desired.description

    if desired.priority is not None:
        record.priority = desired.priority

    if desired.products is not None:
        # Sorted so repeated updates send identical payloads
        record.products = sorted(desired.products)

    return record


def to_local(remote: RemoteRecord, zone_id: str) -> LocalState:
    """
    Translate a remote record back into local state.

    Empty descriptions and empty product lists come back as absent, since
    the remote service does not distinguish the two. Product order is
    discarded.

    Args:
        remote: The record read from the remote service.
        zone_id: Scope of the record; the remote shape does not carry it.

    Returns:
        A LocalState mirroring the remote record exactly.

    Raises:
        ValueError: If the remote action is not a known FirewallRuleAction.
    """
    return LocalState(
        id=remote.id,
        zone_id=zone_id,
        filter_id=remote.filter.id,
        action=FirewallRuleAction(remote.action),
        description=remote.description or None,
        paused=remote.paused,
        priority=remote.priority,
        products=frozenset(remote.products) or None,
    )
