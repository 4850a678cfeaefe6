"""
Firewall Rule Controller - Lifecycle operations for a single rule.

Drives create, read, update, delete and import of one firewall rule
against a remote service client. Every write is followed by a read so the
returned local state is the authoritative remote shape, not the request.
"""

import logging
from dataclasses import replace
from typing import List, Optional

from clients.base import RemoteServiceClient
from errors import ContractViolationError, RemoteOperationError, RemoteServiceError
from identifiers import parse_import_token
from mapper import to_local, to_remote
from models import DesiredState, LocalState, RemoteRecord

logger = logging.getLogger(__name__)


class FirewallRuleController:
    """
    Reconciles a firewall rule's desired state with the remote service.

    The controller holds no state between calls. A bound rule is a
    LocalState; ``None`` means no remote rule is known for the record.
    Callers must serialize operations on the same record.
    """

    def __init__(self, client: RemoteServiceClient):
        self.client = client

    async def create(self, desired: DesiredState) -> Optional[LocalState]:
        """
        Create a rule and return its authoritative state.

        Args:
            desired: The desired state of the new rule.

        Returns:
            The state read back after creation, or None if the rule vanished
            before it could be read. A None result leaves the record unbound
            even though a remote rule may exist; the new id is logged as a
            warning so it can be imported by hand.

        Raises:
            RemoteOperationError: If the create call (or the read after it) fails.
            ContractViolationError: If the service returned no created records.
        """
        zone_id = desired.zone_id
        record = to_remote(desired)

        logger.debug(f"Creating Firewall Rule from record: {record}")

        try:
            created: List[RemoteRecord] = await self.client.create(zone_id, [record])
        except RemoteServiceError as e:
            raise RemoteOperationError("create", zone_id, None, e) from e

        if not created or not created[0].id:
            raise ContractViolationError("create")

        rule_id = created[0].id
        logger.info(f"Firewall Rule ID: {rule_id}")

        state = await self.read(zone_id, rule_id)
        if state is None:
            logger.warning(f"Firewall Rule {rule_id} not found right after create")
        return state

    async def read(self, zone_id: str, rule_id: str) -> Optional[LocalState]:
        """
        Fetch a bound rule from the remote service.

        The result fully replaces whatever the host held for the rule. A rule
        deleted out of band is not an error: None is returned so the host
        drops the record. A record the mapper cannot translate (an unknown
        action, for one) is a read failure.

        Raises:
            RemoteOperationError: On any failure other than not-found; the
                host should keep its current state.
        """
        try:
            record = await self.client.get(zone_id, rule_id)
        except RemoteServiceError as e:
            if e.is_not_found:
                logger.info(f"Firewall Rule {rule_id} no longer exists")
                return None
            raise RemoteOperationError("read", zone_id, rule_id, e) from e

        logger.debug(f"Firewall Rule read configuration: {record}")

        try:
            state = to_local(record, zone_id)
        except ValueError as e:
            cause = RemoteServiceError(f"unrecognised rule in response: {e}")
            raise RemoteOperationError("read", zone_id, rule_id, cause) from e

        # The bound id never changes, whatever the service echoes back
        return replace(state, id=rule_id)

    async def update(self, state: LocalState) -> Optional[LocalState]:
        """
        Replace a bound rule with the given state.

        Every field is sent; fields absent from ``state`` revert to their
        zero value remotely.

        Raises:
            RemoteOperationError: If the update call (or the read after it) fails.
            ContractViolationError: If the service returned a record without an id.
        """
        zone_id = state.zone_id
        record = to_remote(state)

        logger.debug(f"Updating Firewall Rule from record: {record}")

        try:
            updated = await self.client.update(zone_id, record)
        except RemoteServiceError as e:
            raise RemoteOperationError("update", zone_id, state.id, e) from e

        if not updated.id:
            raise ContractViolationError("update")

        result = await self.read(zone_id, state.id)
        if result is None:
            logger.warning(f"Firewall Rule {state.id} not found right after update")
        return result

    async def delete(self, zone_id: str, rule_id: str) -> None:
        """
        Delete a bound rule.

        Not-found is reported like any other failure: deleting a rule that
        is already gone does not silently succeed.

        Raises:
            RemoteOperationError: If the delete call fails for any reason.
        """
        logger.info(f"Deleting Firewall Rule: id {rule_id} for zone {zone_id}")

        try:
            await self.client.delete(zone_id, rule_id)
        except RemoteServiceError as e:
            raise RemoteOperationError("delete", zone_id, rule_id, e) from e

    async def import_rule(self, token: str) -> Optional[LocalState]:
        """
        Adopt an existing rule identified by ``<zone_id>/<rule_id>``.

        Never creates anything remotely. A None result means the rule does
        not exist and the host should report the import as failed.

        Raises:
            MalformedImportTokenError: If the token is malformed; no remote
                call is made.
            RemoteOperationError: If the read fails for a reason other than
                not-found.
        """
        zone_id, rule_id = parse_import_token(token)

        logger.debug(f"Importing Firewall Rule: id {rule_id} for zone {zone_id}")

        return await self.read(zone_id, rule_id)

