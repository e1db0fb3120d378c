"""Export — entity lists to JSON files."""

from lampreas.export.json_export import EntityKind, JsonExporter

__all__ = [
    "EntityKind",
    "JsonExporter",
]
