"""
Remote Service Client Base - Abstract interface to the rule service.

The lifecycle controller consumes this interface only. Implementations
own transport, authentication, retries and timeouts, and must raise
RemoteServiceError with ``kind=RemoteErrorKind.NOT_FOUND`` when the
addressed rule does not exist.
"""

from abc import ABC, abstractmethod
from typing import List

from models import RemoteRecord


class RemoteServiceClient(ABC):
    """
    Abstract base class for firewall rule service clients.

    Every operation is scoped by a zone id.
    """

    @abstractmethod
    async def create(
        self, zone_id: str, rules: List[RemoteRecord]
    ) -> List[RemoteRecord]:
        """
        Create rules in a zone.

        Args:
            zone_id: The zone to create the rules in.
            rules: Records to create; ids are assigned by the service.

        Returns:
            The created records, including their assigned ids.
        """
        pass

    @abstractmethod
    async def get(self, zone_id: str, rule_id: str) -> RemoteRecord:
        """
        Fetch a single rule.

        Raises:
            RemoteServiceError: With kind NOT_FOUND if the rule does not exist.
        """
        pass

    @abstractmethod
    async def update(self, zone_id: str, rule: RemoteRecord) -> RemoteRecord:
        """
        Replace a rule with the given record.

        Args:
            zone_id: The zone the rule lives in.
            rule: The full replacement record; ``rule.id`` addresses the rule.

        Returns:
            The record as stored by the service.
        """
        pass

    @abstractmethod
    async def delete(self, zone_id: str, rule_id: str) -> None:
        """Delete a rule."""
        pass
