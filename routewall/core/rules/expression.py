"""Render path sets as Cloudflare firewall expressions."""

from __future__ import annotations

from collections.abc import Iterable

from routewall.core.rules.paths import WILDCARD

DEFAULT_FIELD = "http.request.uri.path"


def build_expression(paths: Iterable[str], field: str = DEFAULT_FIELD) -> str:
    """Build a negated allowlist expression from paths.

    Shape:
        not (
          http.request.uri.path wildcard "/segment/*" or
          http.request.uri.path in {"/a" "/b"}
        )

    Paths ending in "*" ("/docs/*", "/@*", "/prefix*") go to the wildcard
    clauses; everything else goes to the set literal.

    Examples:
        ["/blog/*", "/about", "/contact"]
        -> not (http.request.uri.path wildcard "/blog/*" or http.request.uri.path in {"/about" "/contact"})

        ["/docs/*"] -> not (http.request.uri.path wildcard "/docs/*")
    """
    routes = list(paths)
    wildcards = [route for route in routes if route.endswith(WILDCARD)]
    exact = [route for route in routes if not route.endswith(WILDCARD)]

    clauses = [f'{field} wildcard "{route}"' for route in wildcards]
    if exact:
        members = " ".join(f'"{route}"' for route in exact)
        clauses.append(f"{field} in {{{members}}}")

    return "not (" + " or ".join(clauses) + ")"
