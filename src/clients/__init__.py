"""
Remote service clients.

Clients implement the RemoteServiceClient interface and translate service
failures into RemoteServiceError with a classified kind.
"""

from clients.base import RemoteServiceClient
from clients.cloudflare import CloudflareFirewallClient

__all__ = ["RemoteServiceClient", "CloudflareFirewallClient"]
