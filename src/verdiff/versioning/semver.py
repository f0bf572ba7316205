"""Semantic version helpers.

Versions follow SemVer 2.0.0: a ``MAJOR.MINOR.PATCH`` core without leading
zeros and an optional pre-release or build suffix (``1.4.0``,
``2.0.0-rc.1``, ``1.0.0-x.7.z.92``, ``1.0.0+build.7``).  Parsing and
precedence are delegated to the :mod:`semver` package, so pre-releases sort
below their release and build metadata is ignored when ordering.
"""

from __future__ import annotations

from collections.abc import Iterable

from semver import Version

from verdiff.errors import VersionNotFoundError, VersionValidationError


def parse_version(version: str) -> Version:
    """Parse *version* into a comparable :class:`semver.Version`.

    Raises
    ------
    VersionValidationError
        If *version* is empty or not a valid semantic version.
    """
    if not version:
        raise VersionValidationError("Version is required", context={"version": version})

    try:
        return Version.parse(version)
    except (TypeError, ValueError) as exc:
        raise VersionValidationError(
            f"Version {version} is not a valid semver version",
            context={"version": version},
            cause=exc,
        ) from exc


def is_valid_version(version: str) -> bool:
    try:
        parse_version(version)
    except VersionValidationError:
        return False
    return True


def sort_versions(versions: Iterable[str]) -> list[str]:
    """Return *versions* in ascending semver precedence.

    Raises
    ------
    VersionValidationError
        If any entry is not a valid version.
    """
    return sorted(versions, key=parse_version)


def previous_version(versions: Iterable[str], version: str) -> str | None:
    """Return the version immediately below *version* among *versions*.

    Returns ``None`` when *version* is the lowest one.

    Raises
    ------
    VersionNotFoundError
        If *version* is not one of *versions*.
    """
    ordered = sort_versions(versions)
    try:
        index = ordered.index(version)
    except ValueError as exc:
        raise VersionNotFoundError(
            f"Version {version} not found",
            context={"version": version},
            cause=exc,
        ) from exc

    if index == 0:
        return None
    return ordered[index - 1]
