"""routewall: compact edge-firewall allowlist rules from application routes."""

__version__ = "0.1.0"
