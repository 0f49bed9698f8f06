"""Cloudflare API client and services."""

from routewall.core.cloudflare.client import CloudflareApiClient
from routewall.core.cloudflare.errors import CloudflareApiError, CloudflareError
from routewall.core.cloudflare.purge_service import CachePurgeService, expand_purge_url
from routewall.core.cloudflare.waf_client import WafApiClient
from routewall.core.cloudflare.waf_service import WafRuleService

__all__ = [
    "CachePurgeService",
    "CloudflareApiClient",
    "CloudflareApiError",
    "CloudflareError",
    "WafApiClient",
    "WafRuleService",
    "expand_purge_url",
]
