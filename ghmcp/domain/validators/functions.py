"""Centralized validation functions for GitHub identifiers and JSON documents.

Validators are pure functions that raise ValueError on validation failure,
so they can be reused from Pydantic models and from services alike.
"""

import math
import re
from typing import cast

from ghmcp.domain.types import Document

_BRANCH_ALLOWED = re.compile(r"[^A-Za-z0-9\-_/.]")
_REPOSITORY_NAME = re.compile(r"^[A-Za-z0-9._-]{1,100}$")


def validate_github_username(v: str) -> str:
    """Validate a GitHub username (or organization login).

    GitHub rules: 1-39 characters, alphanumerics and hyphens,
    not starting or ending with a hyphen.

    Args:
        v: Username to validate.

    Returns:
        Username unchanged (validation only).

    Raises:
        ValueError: If the username breaks GitHub's rules.

    Example:
        >>> validate_github_username("octo-cat")
        'octo-cat'
        >>> validate_github_username("-octocat")
        ValueError: Invalid GitHub username: -octocat
    """
    if (
        not 1 <= len(v) <= 39
        or not all((c.isascii() and c.isalnum()) or c == "-" for c in v)
        or v.startswith("-")
        or v.endswith("-")
    ):
        raise ValueError(f"Invalid GitHub username: {v}")
    return v


def validate_repository(v: str) -> str:
    """Validate an `owner/name` repository reference.

    Args:
        v: Repository full name.

    Returns:
        Repository unchanged (validation only).

    Raises:
        ValueError: If the owner or the name is invalid.
    """
    owner, sep, name = v.partition("/")
    if not sep:
        raise ValueError(f"Repository must be 'owner/name': {v}")
    validate_github_username(owner)
    if not _REPOSITORY_NAME.match(name) or name in (".", ".."):
        raise ValueError(f"Invalid repository name: {name}")
    return v


def sanitize_branch_name(branch: str) -> str:
    """Strip characters that are unsafe in a branch name.

    Keeps alphanumerics, '-', '_', '/' and '.', then trims leading and
    trailing dots.

    Args:
        branch: Raw branch name.

    Returns:
        Sanitized branch name (may be empty).

    Example:
        >>> sanitize_branch_name("feature/login; rm -rf")
        'feature/loginrm-rf'
    """
    return _BRANCH_ALLOWED.sub("", branch).strip(".")


def validate_branch_name(v: str) -> str:
    """Require a branch name that sanitization leaves unchanged.

    Args:
        v: Branch name to validate.

    Returns:
        Branch unchanged (validation only).

    Raises:
        ValueError: If the name is empty or contains unsafe characters.
    """
    if not v or sanitize_branch_name(v) != v:
        raise ValueError(f"Invalid branch name: {v}")
    return v


def validate_json_document(v: object) -> Document:
    """Require a mapping that survives a JSON round trip unchanged.

    Only dicts with string keys, lists, strings, finite numbers, booleans
    and None are accepted. Tuples are rejected because they come back as
    lists.

    Args:
        v: Candidate document.

    Returns:
        Document unchanged (validation only).

    Raises:
        ValueError: If the value is not a JSON object or holds non-JSON data.
    """
    if not isinstance(v, dict):
        raise ValueError("Document must be a JSON object")
    _check_json_value(v, "$")
    return cast(Document, v)


def _check_json_value(value: object, path: str) -> None:
    if value is None or isinstance(value, (str, bool, int)):
        return
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Non-finite number at {path}")
        return
    if isinstance(value, list):
        for index, item in enumerate(value):
            _check_json_value(item, f"{path}[{index}]")
        return
    if isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise ValueError(f"Non-string key at {path}: {key!r}")
            _check_json_value(item, f"{path}.{key}")
        return
    raise ValueError(f"Unsupported {type(value).__name__} at {path}")
