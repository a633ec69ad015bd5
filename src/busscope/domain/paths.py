"""Bus-name and object-path rules.

Validation happens before any bus call. Private (unique) connection names
start with ``:`` and are excluded from name listings.
"""

from __future__ import annotations

import re

from busscope.domain.faults import ValidationFault

ROOT_PATH = "/"
PRIVATE_NAME_SIGIL = ":"

MAX_SERVICE_NAME_LENGTH = 255
MAX_OBJECT_PATH_LENGTH = 1024

_SERVICE_NAME_CHARS = re.compile(r"[\w.\-]+")
_OBJECT_PATH_CHARS = re.compile(r"[\w/\-]+")
_SEGMENT_CHARS = re.compile(r"[\w\-]+")


def is_private_name(name: str) -> bool:
    """True for unique connection names such as ``:1.42``."""
    return name.startswith(PRIVATE_NAME_SIGIL)


def validate_service_name(name: str, *, allow_unique: bool = False) -> None:
    """Raise :class:`ValidationFault` if *name* is not a usable bus name.

    Unique names (``:1.42``) are only accepted with *allow_unique*.
    """
    if not name:
        raise ValidationFault("Service name cannot be empty")
    if len(name) > MAX_SERVICE_NAME_LENGTH:
        raise ValidationFault("Service name too long")
    body = name[1:] if allow_unique and is_private_name(name) else name
    if not body or not _SERVICE_NAME_CHARS.fullmatch(body):
        raise ValidationFault("Invalid characters in service name")


def validate_object_path(path: str) -> None:
    """Raise :class:`ValidationFault` if *path* is not a usable object path."""
    if not path:
        raise ValidationFault("Object path cannot be empty")
    if not path.startswith(ROOT_PATH):
        raise ValidationFault("Object path must start with '/'")
    if len(path) > MAX_OBJECT_PATH_LENGTH:
        raise ValidationFault("Object path too long")
    if not _OBJECT_PATH_CHARS.fullmatch(path):
        raise ValidationFault("Invalid characters in object path")


def is_valid_segment(segment: str) -> bool:
    """True for one advertised child name: non-empty, no separators."""
    return bool(_SEGMENT_CHARS.fullmatch(segment))


def join_child_path(parent: str, child: str) -> str:
    """Join a parent path and an advertised child segment.

    Examples:
        >>> join_child_path("/", "org")
        '/org'
        >>> join_child_path("/org", "freedesktop")
        '/org/freedesktop'
    """
    if parent == ROOT_PATH:
        return f"/{child}"
    return f"{parent}/{child}"


def parent_path(path: str) -> str | None:
    """Structural parent of *path*, or None for the root.

    Examples:
        >>> parent_path("/a/b")
        '/a'
        >>> parent_path("/a")
        '/'
        >>> parent_path("/") is None
        True
    """
    if path == ROOT_PATH:
        return None
    head, _, _ = path.rstrip("/").rpartition("/")
    return head or ROOT_PATH
