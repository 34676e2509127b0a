"""
sifflet-sources: polymorphic source parameters for the Sifflet API.

Architecture:
    config block → Resolver → Handler → DTO → (HTTP) → Decoder → Handler → config block

Layers:
    - domain/: Configuration-facing types (parameter records, flat container, source)
    - wire/: camelCase API DTOs and the oneOf discriminating decoder
    - handlers/: One declarative handler per source type, and their registry
    - resolver, planner, sources: Operations over whole parameter blocks and sources

Key Concepts:
    - A parameters block sets exactly one of 19 source type slots
    - source_type is derived from the populated slot, never the other way round
    - A change of source type forces replacing the source
"""

__version__ = "0.1.0"
