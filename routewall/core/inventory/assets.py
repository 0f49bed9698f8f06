"""Static asset enumeration for the public web root."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

DEFAULT_EXCLUDED_ASSETS: tuple[str, ...] = (
    ".htaccess",
    "index.php",
)


def public_asset_paths(
    public_dir: Path,
    excluded: Iterable[str] = DEFAULT_EXCLUDED_ASSETS,
) -> list[str]:
    """List top-level entries of the public directory as request paths.

    Dotfiles are included. Directories become "name/*" so everything
    beneath them stays reachable.

    Returns:
        Sorted relative paths, e.g. ["css/*", "favicon.ico", "robots.txt"]
    """
    if not public_dir.is_dir():
        return []

    skip = set(excluded)
    paths: list[str] = []
    for entry in sorted(public_dir.iterdir(), key=lambda p: p.name):
        if entry.name in skip:
            continue
        paths.append(f"{entry.name}/*" if entry.is_dir() else entry.name)
    return paths
