"""Domain validators.

Usage:
    from ghmcp.domain.validators import validate_repository, validate_branch_name
"""

from ghmcp.domain.validators.functions import (
    sanitize_branch_name,
    validate_branch_name,
    validate_github_username,
    validate_json_document,
    validate_repository,
)

__all__ = [
    "sanitize_branch_name",
    "validate_branch_name",
    "validate_github_username",
    "validate_json_document",
    "validate_repository",
]
