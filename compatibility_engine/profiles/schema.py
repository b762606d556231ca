"""
Profile data model for compatibility scoring.

Defines the attribute values that make up a profile dimension, the
per-profile attribute set, and the result record returned by scoring.

Attribute Values (explicit tagged union):
- TagSet: unordered collection of unique string tags (interests, values)
- Scalar: non-negative real number (age preference, importance rating)
- Category: single string label (relationship goal)
- Group: mapping from string key to nested attribute value

Raw profile data arrives as plain JSON-like structures (lists, numbers,
strings, dicts). `to_attribute_value` converts that shape into the
tagged variants once, so that scoring can dispatch on an explicit kind.
"""

import logging
import math
import numbers
import types
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, Iterable, List, Mapping, Optional, Union

logger = logging.getLogger(__name__)


# Fixed profile dimensions, in scoring order
DIMENSIONS = ("values", "personality", "interests", "goals", "communication")

# External payload key for each dimension score
RESULT_KEYS = {
    "values": "valuesSimilarity",
    "personality": "personalityTraitsSimilarity",
    "interests": "interestsSimilarity",
    "goals": "relationshipExpectationsSimilarity",
    "communication": "communicationStyleSimilarity",
}

# Human-readable factor names for each dimension
FACTOR_NAMES = {
    "values": "Core values",
    "personality": "Personality traits",
    "interests": "Shared interests",
    "goals": "Relationship expectations",
    "communication": "Communication style",
}

# Group nesting depth scored by default
DEFAULT_MAX_DEPTH = 32

# Hard bound on group nesting, for both raw conversion and scoring
MAX_DEPTH_LIMIT = 200

# Questionnaire category -> profile dimension
QUESTIONNAIRE_CATEGORIES = {
    "values": "values",
    "personality": "personality",
    "interestsAndHobbies": "interests",
    "relationshipGoals": "goals",
    "communicationStyle": "communication",
}


class AttributeKind(Enum):
    """Variant tag of an attribute value."""
    TAG_SET = "tag_set"
    SCALAR = "scalar"
    CATEGORY = "category"
    GROUP = "group"


@dataclass(frozen=True)
class TagSet:
    """
    Unordered collection of unique string tags.

    Duplicate tags collapse; order is irrelevant.
    """
    tags: frozenset = frozenset()

    kind: ClassVar[AttributeKind] = AttributeKind.TAG_SET

    def __post_init__(self):
        if not isinstance(self.tags, frozenset):
            object.__setattr__(self, "tags", frozenset(self.tags))
        for tag in self.tags:
            if not isinstance(tag, str):
                raise ValueError(f"TagSet tags must be strings, got {type(tag).__name__}")

    def __len__(self) -> int:
        return len(self.tags)


@dataclass(frozen=True)
class Scalar:
    """Non-negative, finite real number."""
    value: float

    kind: ClassVar[AttributeKind] = AttributeKind.SCALAR

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, numbers.Real):
            raise ValueError(f"Scalar value must be a number, got {type(self.value).__name__}")
        try:
            value = float(self.value)
        except OverflowError:
            raise ValueError("Scalar value is too large to represent as a float")
        if not math.isfinite(value) or value < 0:
            raise ValueError(f"Scalar value must be finite and non-negative, got {value}")
        object.__setattr__(self, "value", value)


@dataclass(frozen=True)
class Category:
    """Single case-sensitive string label."""
    label: str

    kind: ClassVar[AttributeKind] = AttributeKind.CATEGORY

    def __post_init__(self):
        if not isinstance(self.label, str):
            raise ValueError(f"Category label must be a string, got {type(self.label).__name__}")


@dataclass(frozen=True)
class Group:
    """
    Mapping from string key to nested attribute value.

    Groups are tree-shaped; a group never contains itself. The items are
    stored as a read-only mapping.
    """
    items: Mapping[str, "AttributeValue"] = field(default_factory=dict)

    kind: ClassVar[AttributeKind] = AttributeKind.GROUP

    def __post_init__(self):
        items = dict(self.items)
        for key, value in items.items():
            if not isinstance(key, str):
                raise ValueError(f"Group keys must be strings, got {type(key).__name__}")
            if not isinstance(value, ATTRIBUTE_TYPES):
                raise ValueError(f"Group value for '{key}' is not an attribute value: {value!r}")
        object.__setattr__(self, "items", types.MappingProxyType(items))

    def __eq__(self, other):
        if not isinstance(other, Group):
            return NotImplemented
        return dict(self.items) == dict(other.items)

    def __hash__(self):
        return hash(tuple(sorted(self.items.items())))

    def keys(self):
        return self.items.keys()

    def __getitem__(self, key: str) -> "AttributeValue":
        return self.items[key]


AttributeValue = Union[TagSet, Scalar, Category, Group]
ATTRIBUTE_TYPES = (TagSet, Scalar, Category, Group)


def to_attribute_value(raw: Any, _depth: int = 0) -> Optional[AttributeValue]:
    """
    Convert raw profile data into an attribute value.

    Conversion rules:
        list / tuple / set of strings -> TagSet
        int / float (not bool), finite and >= 0 -> Scalar
        str -> Category
        dict with string keys -> Group (unrecognized entries are dropped)

    Numbers too large for a float and dicts nested deeper than
    MAX_DEPTH_LIMIT are not recognized.

    Args:
        raw: Raw value as delivered by the profile store

    Returns:
        The attribute value, or None if the shape is not recognized
    """
    if isinstance(raw, ATTRIBUTE_TYPES):
        return raw

    if isinstance(raw, (list, tuple, set, frozenset)):
        if all(isinstance(tag, str) for tag in raw):
            return TagSet(frozenset(raw))
        logger.debug(f"Unrecognized tag collection with non-string items: {raw!r}")
        return None

    if isinstance(raw, bool):
        logger.debug(f"Unrecognized boolean attribute value: {raw!r}")
        return None

    if isinstance(raw, numbers.Real):
        try:
            value = float(raw)
        except OverflowError:
            logger.debug("Unrecognized scalar too large for a float")
            return None
        if math.isfinite(value) and value >= 0:
            return Scalar(value)
        logger.debug(f"Unrecognized scalar outside [0, inf): {raw!r}")
        return None

    if isinstance(raw, str):
        return Category(raw)

    if isinstance(raw, dict):
        if _depth >= MAX_DEPTH_LIMIT:
            logger.debug(f"Dropping group nested deeper than {MAX_DEPTH_LIMIT} levels")
            return None
        items = {}
        for key, value in raw.items():
            if not isinstance(key, str):
                logger.debug(f"Dropping group entry with non-string key: {key!r}")
                continue
            converted = to_attribute_value(value, _depth + 1)
            if converted is not None:
                items[key] = converted
        return Group(items)

    logger.debug(f"Unrecognized attribute value of type {type(raw).__name__}")
    return None


@dataclass(frozen=True)
class ProfileAttributeSet:
    """
    Attribute values of one profile, keyed by dimension.

    Built by the profile store at scoring time and discarded afterwards.
    A dimension without data is None.
    """
    values: Optional[AttributeValue] = None
    personality: Optional[AttributeValue] = None
    interests: Optional[AttributeValue] = None
    goals: Optional[AttributeValue] = None
    communication: Optional[AttributeValue] = None

    def get(self, dimension: str) -> Optional[AttributeValue]:
        """Return the attribute value for a dimension, or None."""
        if dimension not in DIMENSIONS:
            return None
        return getattr(self, dimension)

    def to_dict(self) -> Dict[str, Optional[AttributeValue]]:
        """Convert to dictionary keyed by dimension."""
        return {dim: getattr(self, dim) for dim in DIMENSIONS}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ProfileAttributeSet":
        """
        Create from raw profile data.

        Unknown keys are ignored; values are converted with
        `to_attribute_value`.
        """
        return cls(**{
            dim: to_attribute_value(data[dim])
            for dim in DIMENSIONS
            if dim in data and data[dim] is not None
        })

    @classmethod
    def from_questionnaire(cls, responses: Iterable[Mapping[str, Any]]) -> "ProfileAttributeSet":
        """
        Create from questionnaire responses.

        Each response carries the question metadata and the answer:
            {"question": {"metadata": {"category": ..., "compatibilityFactor": ...}},
             "answer": ...}

        Answers are grouped per dimension under their compatibility factor.
        Malformed responses, responses without a category or factor, and
        responses in a category that is not a profile dimension are skipped.

        Args:
            responses: Questionnaire responses for one person

        Returns:
            ProfileAttributeSet with one Group per answered dimension
        """
        grouped: Dict[str, Dict[str, Any]] = {}

        for response in responses or []:
            if not isinstance(response, Mapping):
                continue
            question = response.get("question")
            if not isinstance(question, Mapping):
                continue
            metadata = question.get("metadata")
            if not isinstance(metadata, Mapping):
                continue
            category = metadata.get("category")
            factor = metadata.get("compatibilityFactor")
            if not isinstance(category, str) or not isinstance(factor, str) or not factor:
                continue
            dimension = QUESTIONNAIRE_CATEGORIES.get(category)
            if dimension is None:
                continue
            grouped.setdefault(dimension, {})[factor] = response.get("answer")

        return cls.from_dict(grouped)


@dataclass(frozen=True)
class CompatibilityFactor:
    """One scored compatibility factor for display alongside a match."""
    name: str
    score: float
    description: str
    category: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "score": self.score,
            "description": self.description,
            "category": self.category,
        }


@dataclass(frozen=True)
class CompatibilityResult:
    """
    Result of compatibility scoring.

    Attributes:
        values: Values dimension similarity [0, 1]
        personality: Personality dimension similarity [0, 1]
        interests: Interests dimension similarity [0, 1]
        goals: Relationship goals dimension similarity [0, 1]
        communication: Communication style dimension similarity [0, 1]
        overall: Weighted overall similarity [0, 1]
    """
    values: float
    personality: float
    interests: float
    goals: float
    communication: float
    overall: float

    @property
    def compatibility_score(self) -> int:
        """Overall score on the 0-100 scale used by match records."""
        return int(round(self.overall * 100))

    def dimension_scores(self) -> Dict[str, float]:
        """Per-dimension scores keyed by dimension name."""
        return {dim: getattr(self, dim) for dim in DIMENSIONS}

    def to_dict(self) -> Dict[str, float]:
        """Convert to the external payload shape."""
        result = {RESULT_KEYS[dim]: getattr(self, dim) for dim in DIMENSIONS}
        result["overallSimilarity"] = self.overall
        return result

    def to_factors(self) -> List[CompatibilityFactor]:
        """
        Describe each dimension as a compatibility factor.

        Returns:
            Factors ordered by descending score
        """
        factors = []
        for dim, score in self.dimension_scores().items():
            if score >= 0.75:
                level = "Strong"
            elif score >= 0.4:
                level = "Moderate"
            else:
                level = "Weak"
            factors.append(CompatibilityFactor(
                name=FACTOR_NAMES[dim],
                score=score,
                description=f"{level} alignment in {FACTOR_NAMES[dim].lower()}",
                category=dim,
            ))
        return sorted(factors, key=lambda f: f.score, reverse=True)
