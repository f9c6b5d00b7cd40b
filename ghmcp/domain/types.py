"""Structural types for opaque JSON documents.

Audit metadata and workflow state are free-form, but they are still JSON:
a mapping of string keys to scalars, lists or nested mappings. Spelling
that out keeps type checkers informative without fixing a schema.

Usage:
    from ghmcp.domain.types import Document

    state: Document = {"step": "pushed", "commits": 3, "files": ["a.py"]}
"""

type JsonScalar = str | int | float | bool | None
type JsonValue = JsonScalar | list[JsonValue] | dict[str, JsonValue]
type Document = dict[str, JsonValue]
