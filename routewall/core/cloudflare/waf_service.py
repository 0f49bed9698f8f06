"""Create-or-update sync of the allowlist firewall rule."""

from __future__ import annotations

import logging
from typing import Any

from routewall.core.cloudflare.errors import CloudflareError
from routewall.core.cloudflare.waf_client import WafApiClient
from routewall.models.results import SyncAction, WafRuleResult
from routewall.models.settings import Settings
from routewall.utils.config import require_api_credentials

logger = logging.getLogger(__name__)

FILTER_DESCRIPTION = "routewall allowlist filter"


class WafRuleService:
    """Keep one firewall rule in sync with a generated expression.

    The rule is found by an ``[id:<rule_identifier>]`` marker in its
    description, so renaming the description keeps it managed.
    """

    def __init__(self, settings: Settings, client: WafApiClient | None = None) -> None:
        self.settings = settings
        if client is None:
            require_api_credentials(settings)
            client = WafApiClient.from_settings(settings.api)
        self.client = client

    def sync_rule(self, expression: str) -> WafRuleResult:
        """Update the managed rule's filter, or create filter and rule when absent."""
        existing = self.find_existing_rule()
        if existing:
            return self._update_rule(str(existing["id"]), expression)
        return self._create_rule(expression)

    def find_existing_rule(self) -> dict[str, Any] | None:
        marker = self.rule_marker
        for rule in self.client.get_firewall_rules():
            if marker in (rule.get("description") or ""):
                return rule
        return None

    @property
    def rule_marker(self) -> str:
        return f"[id:{self.settings.waf.rule_identifier}]"

    @property
    def rule_description(self) -> str:
        return f"{self.settings.waf.rule_description} {self.rule_marker}"

    def _create_rule(self, expression: str) -> WafRuleResult:
        filters = self.client.create_filters(
            [{"expression": expression, "description": FILTER_DESCRIPTION}]
        )
        if not filters or "id" not in filters[0]:
            raise CloudflareError("Filter creation returned no filter id")
        filter_id = str(filters[0]["id"])

        rule_data = [
            {
                "action": self.settings.waf.rule_action,
                "description": self.rule_description,
                "filter": {"id": filter_id},
                "paused": False,
            }
        ]
        try:
            rules = self.client.create_firewall_rules(rule_data)
        except CloudflareError:
            self._delete_filter(filter_id)
            raise

        rule_id = str(rules[0].get("id", "")) if rules else ""
        logger.info("Created firewall rule %s with filter %s", rule_id, filter_id)
        return WafRuleResult(
            action=SyncAction.CREATE,
            rule_id=rule_id,
            filter_id=filter_id,
            expression=expression,
            message="Successfully created new WAF rule",
        )

    def _update_rule(self, rule_id: str, expression: str) -> WafRuleResult:
        rule = self.client.get_firewall_rule(rule_id)
        rule_filter = rule.get("filter") or {}
        filter_id = str(rule_filter.get("id", ""))
        if not filter_id:
            raise CloudflareError(f"Firewall rule {rule_id} has no filter to update")

        self.client.update_filter(
            filter_id,
            {
                "id": filter_id,
                "expression": expression,
                "description": rule_filter.get("description"),
            },
        )
        logger.info("Updated filter %s of firewall rule %s", filter_id, rule_id)
        return WafRuleResult(
            action=SyncAction.UPDATE,
            rule_id=rule_id,
            filter_id=filter_id,
            expression=expression,
            message="Successfully updated existing WAF rule",
        )

    def _delete_filter(self, filter_id: str) -> None:
        """Remove a filter orphaned by a failed rule creation."""
        try:
            self.client.delete_filter(filter_id)
        except CloudflareError as exc:
            logger.warning("Could not delete orphaned filter %s: %s", filter_id, exc)
