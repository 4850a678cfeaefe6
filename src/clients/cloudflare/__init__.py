"""Cloudflare v4 API client for firewall rules."""

from clients.cloudflare.client import CloudflareFirewallClient

__all__ = ["CloudflareFirewallClient"]
