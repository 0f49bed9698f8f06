"""Firewall rule and filter endpoints."""

from __future__ import annotations

from typing import Any

from routewall.core.cloudflare.client import CloudflareApiClient


class WafApiClient(CloudflareApiClient):
    """Zone-scoped firewall rule and filter operations.

    Every method raises ``CloudflareApiError`` when the request fails.
    """

    def get_firewall_rules(self) -> list[dict[str, Any]]:
        return self.result(self.get(self.zone_endpoint("firewall", "rules")), [])

    def get_firewall_rule(self, rule_id: str) -> dict[str, Any]:
        return self.result(self.get(self.zone_endpoint("firewall", "rules", rule_id)), {})

    def create_firewall_rules(self, rules: list[dict[str, Any]]) -> list[dict[str, Any]]:
        return self.result(self.post(self.zone_endpoint("firewall", "rules"), rules), [])

    def update_firewall_rule(self, rule_id: str, rule_data: dict[str, Any]) -> dict[str, Any]:
        return self.result(
            self.put(self.zone_endpoint("firewall", "rules", rule_id), rule_data), {}
        )

    def delete_firewall_rule(self, rule_id: str) -> None:
        self.delete(self.zone_endpoint("firewall", "rules", rule_id))

    def get_filters(self) -> list[dict[str, Any]]:
        return self.result(self.get(self.zone_endpoint("filters")), [])

    def get_filter(self, filter_id: str) -> dict[str, Any]:
        return self.result(self.get(self.zone_endpoint("filters", filter_id)), {})

    def create_filters(self, filters: list[dict[str, Any]]) -> list[dict[str, Any]]:
        return self.result(self.post(self.zone_endpoint("filters"), filters), [])

    def update_filter(self, filter_id: str, filter_data: dict[str, Any]) -> dict[str, Any]:
        return self.result(self.put(self.zone_endpoint("filters", filter_id), filter_data), {})

    def delete_filter(self, filter_id: str) -> None:
        self.delete(self.zone_endpoint("filters", filter_id))
