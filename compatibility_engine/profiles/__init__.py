"""Profile data model: attribute values, profile attribute sets and results."""

from .schema import (
    DIMENSIONS,
    AttributeKind,
    AttributeValue,
    TagSet,
    Scalar,
    Category,
    Group,
    to_attribute_value,
    ProfileAttributeSet,
    CompatibilityFactor,
    CompatibilityResult,
)

__all__ = [
    "DIMENSIONS",
    "AttributeKind",
    "AttributeValue",
    "TagSet",
    "Scalar",
    "Category",
    "Group",
    "to_attribute_value",
    "ProfileAttributeSet",
    "CompatibilityFactor",
    "CompatibilityResult",
]
