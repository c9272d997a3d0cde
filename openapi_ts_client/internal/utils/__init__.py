"""Утилиты для генератора"""

from .naming import (
    class_name_from_title,
    ensure_unique_method_names,
    ensure_unique_type_names,
    property_access,
    property_key,
    sanitize_method_name,
    sanitize_type_name,
)

__all__ = [
    "class_name_from_title",
    "ensure_unique_method_names",
    "ensure_unique_type_names",
    "property_access",
    "property_key",
    "sanitize_method_name",
    "sanitize_type_name",
]
