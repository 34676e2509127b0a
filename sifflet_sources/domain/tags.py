"""Source type tags.

A source type has a lowercase *schema tag* (``bigquery``, ``dbt_cloud``) used
in configuration and an uppercase *wire tag* (``BIGQUERY``, ``DBT_CLOUD``) used
in API payloads. These two functions are the only place where one is derived
from the other.
"""

from __future__ import annotations


def to_wire_tag(schema_tag: str) -> str:
    """Convert a schema tag to its wire form."""
    return schema_tag.upper()


def to_schema_tag(wire_tag: str) -> str:
    """Convert a wire tag to its schema form."""
    return wire_tag.lower()
