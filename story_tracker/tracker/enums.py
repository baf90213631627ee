"""Enums for the tracker domain."""

from enum import Enum


class FieldType(str, Enum):
    """Value type of a tracker field.

    The type guides prompt rendering and coercion of plain-text model
    output; values are stored as-is otherwise.
    """

    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"


class GenerationMode(str, Enum):
    """How tracker updates are produced.

    - TOGETHER: The main chat reply carries the tracker block
    - SEPARATE: A dedicated model call produces the tracker block
    """

    TOGETHER = "together"
    SEPARATE = "separate"
