import math

import numpy as np
import pytest

from compatibility_engine.profiles import (
    AttributeKind,
    Category,
    CompatibilityResult,
    Group,
    ProfileAttributeSet,
    Scalar,
    TagSet,
    to_attribute_value,
)
from compatibility_engine.profiles.schema import MAX_DEPTH_LIMIT


class TestAttributeValues:

    def test_kinds(self):
        assert TagSet(["a"]).kind == AttributeKind.TAG_SET
        assert Scalar(1).kind == AttributeKind.SCALAR
        assert Category("a").kind == AttributeKind.CATEGORY
        assert Group({}).kind == AttributeKind.GROUP

    @pytest.mark.parametrize("value", [-1, float("nan"), float("inf"), True, "3"])
    def test_invalid_scalars_rejected(self, value):
        with pytest.raises(ValueError):
            Scalar(value)

    def test_scalar_stored_as_float(self):
        assert Scalar(3).value == 3.0
        assert isinstance(Scalar(3).value, float)

    def test_tag_set_rejects_non_strings(self):
        with pytest.raises(ValueError):
            TagSet([1, 2])

    def test_category_rejects_non_strings(self):
        with pytest.raises(ValueError):
            Category(5)

    def test_group_rejects_raw_values(self):
        with pytest.raises(ValueError):
            Group({"a": "raw string"})

    def test_scalar_rejects_integers_too_large_for_float(self):
        with pytest.raises(ValueError):
            Scalar(10 ** 400)

    def test_group_is_hashable(self):
        a = Group({"x": Scalar(1), "y": Group({"z": Category("c")})})
        b = Group({"y": Group({"z": Category("c")}), "x": Scalar(1)})
        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_group_items_are_read_only(self):
        group = Group({"x": Scalar(1)})
        with pytest.raises(TypeError):
            group.items["x"] = Scalar(2)

    def test_group_does_not_share_source_dict(self):
        source = {"x": Scalar(1)}
        group = Group(source)
        source["x"] = Scalar(2)
        source["y"] = Scalar(3)
        assert group == Group({"x": Scalar(1)})


class TestToAttributeValue:

    def test_list_of_strings(self):
        assert to_attribute_value(["b", "a", "b"]) == TagSet(frozenset({"a", "b"}))

    def test_numbers(self):
        assert to_attribute_value(5) == Scalar(5.0)
        assert to_attribute_value(0.5) == Scalar(0.5)
        assert to_attribute_value(np.int64(3)) == Scalar(3.0)

    def test_string(self):
        assert to_attribute_value("long_term") == Category("long_term")

    def test_nested_dict(self):
        value = to_attribute_value({"style": "direct", "scores": {"warmth": 4}})
        assert value == Group({
            "style": Category("direct"),
            "scores": Group({"warmth": Scalar(4.0)}),
        })

    def test_existing_attribute_passes_through(self):
        value = Category("x")
        assert to_attribute_value(value) is value

    @pytest.mark.parametrize("raw", [None, True, -3, float("nan"), ["a", 1], object()])
    def test_unrecognized_shapes(self, raw):
        assert to_attribute_value(raw) is None

    def test_unrecognized_group_entries_dropped(self):
        value = to_attribute_value({"keep": "x", "drop": None, 3: "non-string key"})
        assert value == Group({"keep": Category("x")})

    def test_integer_too_large_for_float_is_unrecognized(self):
        assert to_attribute_value(10 ** 400) is None
        assert to_attribute_value({"age": 10 ** 400, "height": 180}) == Group({"height": Scalar(180)})

    def test_nesting_beyond_limit_is_dropped(self):
        raw = "leaf"
        for level in range(3000):
            raw = {f"level{level}": raw}
        value = to_attribute_value(raw)
        depth = 0
        while value.keys():
            value = value[next(iter(value.keys()))]
            depth += 1
        assert depth == MAX_DEPTH_LIMIT - 1
        assert value == Group({})


class TestProfileAttributeSet:

    def test_from_dict(self, raw_person_a):
        profile = ProfileAttributeSet.from_dict(raw_person_a)
        assert profile.interests == TagSet(["hiking", "music", "cooking"])
        assert profile.goals == Category("long_term")
        assert profile.personality.kind == AttributeKind.GROUP

    def test_from_dict_ignores_unknown_keys_and_nulls(self):
        profile = ProfileAttributeSet.from_dict({"interests": None, "zodiac": "leo"})
        assert profile == ProfileAttributeSet()

    def test_get(self, person_a):
        assert person_a.get("goals") == Category("long_term")
        assert person_a.get("zodiac") is None

    def test_to_dict(self, person_a):
        assert list(person_a.to_dict()) == ["values", "personality", "interests", "goals", "communication"]

    def test_from_questionnaire(self):
        responses = [
            {
                "question": {"metadata": {"category": "relationshipGoals", "compatibilityFactor": "commitment"}},
                "answer": "long_term",
            },
            {
                "question": {"metadata": {"category": "relationshipGoals", "compatibilityFactor": "children"}},
                "answer": "wants",
            },
            {
                "question": {"metadata": {"category": "interestsAndHobbies", "compatibilityFactor": "hobbies"}},
                "answer": ["hiking", "music"],
            },
            {
                "question": {"metadata": {"category": "communicationStyle", "compatibilityFactor": "texting"}},
                "answer": 4,
            },
            # Not a profile dimension
            {
                "question": {"metadata": {"category": "lifestyleFactors", "compatibilityFactor": "smoking"}},
                "answer": "never",
            },
            # No metadata
            {"question": {}, "answer": "ignored"},
            None,
        ]

        profile = ProfileAttributeSet.from_questionnaire(responses)

        assert profile.goals == Group({
            "commitment": Category("long_term"),
            "children": Category("wants"),
        })
        assert profile.interests == Group({"hobbies": TagSet(["hiking", "music"])})
        assert profile.communication == Group({"texting": Scalar(4)})
        assert profile.values is None
        assert profile.personality is None

    @pytest.mark.parametrize("response", [
        {"question": "q1", "answer": "x"},
        {"question": ["q1"], "answer": "x"},
        {"question": {"metadata": "x"}, "answer": "x"},
        {"question": {"metadata": ["relationshipGoals"]}, "answer": "x"},
        {"question": {"metadata": {"category": ["values"], "compatibilityFactor": "f"}}, "answer": "x"},
        {"question": {"metadata": {"category": "values", "compatibilityFactor": ["f"]}}, "answer": "x"},
        {"question": {"metadata": {"category": {"a": 1}, "compatibilityFactor": {"b": 2}}}, "answer": "x"},
    ])
    def test_malformed_questionnaire_responses_skipped(self, response):
        valid = {
            "question": {"metadata": {"category": "values", "compatibilityFactor": "honesty"}},
            "answer": "high",
        }
        profile = ProfileAttributeSet.from_questionnaire([response, valid])
        assert profile == ProfileAttributeSet(values=Group({"honesty": Category("high")}))

    def test_from_empty_questionnaire(self):
        assert ProfileAttributeSet.from_questionnaire([]) == ProfileAttributeSet()
        assert ProfileAttributeSet.from_questionnaire(None) == ProfileAttributeSet()


class TestCompatibilityResult:

    @pytest.fixture
    def result(self):
        return CompatibilityResult(
            values=0.8, personality=0.6, interests=0.25,
            goals=1.0, communication=0.5, overall=0.6775,
        )

    def test_to_dict_payload_keys(self, result):
        assert result.to_dict() == {
            "valuesSimilarity": 0.8,
            "personalityTraitsSimilarity": 0.6,
            "interestsSimilarity": 0.25,
            "relationshipExpectationsSimilarity": 1.0,
            "communicationStyleSimilarity": 0.5,
            "overallSimilarity": 0.6775,
        }

    def test_compatibility_score(self, result):
        assert result.compatibility_score == 68

    def test_is_immutable(self, result):
        with pytest.raises(AttributeError):
            result.overall = 1.0

    def test_factors(self, result):
        factors = result.to_factors()
        assert [f.category for f in factors] == ["goals", "values", "personality", "communication", "interests"]
        assert factors[0].description == "Strong alignment in relationship expectations"
        assert factors[2].description.startswith("Moderate")
        assert factors[-1].description.startswith("Weak")
        assert factors[0].to_dict()["name"] == "Relationship expectations"
        assert not any(math.isnan(f.score) for f in factors)
