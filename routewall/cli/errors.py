"""Shared error reporting for CLI commands."""

from __future__ import annotations

import sys
from typing import NoReturn

from routewall.core.cloudflare.errors import CloudflareError
from routewall.ui.console import print_error


def fail(message: str, *, hint: str | None = None) -> NoReturn:
    print_error(message, hint=hint)
    sys.exit(1)


def fail_with_cloudflare_error(exc: CloudflareError, permission: str) -> NoReturn:
    """Report an API failure with a hint for auth and rate-limit errors.

    Args:
        exc: The failed request's error
        permission: API token permission the command needs, e.g. "Zone:Cache Purge:Edit"
    """
    hint = None
    if exc.is_authentication_error:
        hint = (
            "Check that ROUTEWALL_API_TOKEN is valid and has the "
            f"'{permission}' permission for this zone."
        )
    elif exc.is_rate_limit_error:
        hint = "Wait a moment and try again."
    fail(str(exc), hint=hint)
