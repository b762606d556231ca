"""
Shared fixtures for compatibility engine tests.
"""

import pytest

from compatibility_engine.profiles import ProfileAttributeSet


@pytest.fixture
def raw_person_a():
    """Raw profile data for Person A."""
    return {
        "values": ["honesty", "curiosity", "family"],
        "personality": {
            "extraversion": 4,
            "agreeableness": 5,
            "conscientiousness": 3,
            "openness": 4,
            "neuroticism": 2,
        },
        "interests": ["hiking", "music", "cooking"],
        "goals": "long_term",
        "communication": {"style": "direct", "frequency": "daily"},
    }


@pytest.fixture
def raw_person_b_similar():
    """Raw profile data for Person B (similar to A)."""
    return {
        "values": ["honesty", "curiosity", "adventure"],
        "personality": {
            "extraversion": 4,
            "agreeableness": 4,
            "conscientiousness": 3,
            "openness": 5,
            "neuroticism": 2,
        },
        "interests": ["music", "travel"],
        "goals": "long_term",
        "communication": {"style": "direct", "frequency": "weekly"},
    }


@pytest.fixture
def raw_person_c_different():
    """Raw profile data for Person C (different from A)."""
    return {
        "values": ["tradition", "stability"],
        "personality": {
            "extraversion": 2,
            "agreeableness": 2,
            "conscientiousness": 5,
            "openness": 2,
            "neuroticism": 4,
        },
        "interests": ["television", "gardening"],
        "goals": "casual",
        "communication": {"style": "reserved", "frequency": "weekly"},
    }


@pytest.fixture
def person_a(raw_person_a):
    return ProfileAttributeSet.from_dict(raw_person_a)


@pytest.fixture
def person_b_similar(raw_person_b_similar):
    return ProfileAttributeSet.from_dict(raw_person_b_similar)


@pytest.fixture
def person_c_different(raw_person_c_different):
    return ProfileAttributeSet.from_dict(raw_person_c_different)
