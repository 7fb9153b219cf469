"""Tests for MakeupAdvisor."""

import pytest

from facial_geometry.processing.makeup_advisor import MakeupAdvisor


@pytest.fixture
def advisor():
    return MakeupAdvisor()


class TestRecommendations:

    @pytest.mark.parametrize("occasion, region, expected", [
        ("daily", "Western", "Natural/Minimal"),
        ("office", "Asian", "Natural/Minimal"),
        ("parties", "Indian", "Glam/Bold"),
        ("weddings", "Western", "Glam/Bold"),
        ("festivals", "Indian", "Ethnic/Traditional"),
        ("rituals", "Asian", "Ethnic/Traditional"),
        ("festivals", "Western", "unknown"),
        ("fashion events", "Western", "Trendy/Editorial"),
        ("gym", "Asian", "unknown"),
    ])
    def test_makeup_look(self, advisor, occasion, region, expected):
        result = advisor.get_recommendations(occasion, region, "classic", "neutral")
        assert result.makeup_look == expected

    @pytest.mark.parametrize("palette, expected", [
        ("neutral", "Nude tones, light blush"),
        ("warm tones", "warm tones"),
        ("cool tones", "cool tones"),
        ("pastel", "unknown"),
    ])
    def test_color_tips(self, advisor, palette, expected):
        assert advisor.get_recommendations("daily", "Asian", "classic", palette).color_tips == expected

    @pytest.mark.parametrize("args", [
        (None, "Asian", "classic", "neutral"),
        ("daily", "", "classic", "neutral"),
        ("daily", "Asian", None, "neutral"),
        ("daily", "Asian", "classic", None),
    ])
    def test_missing_input_is_unknown(self, advisor, args):
        result = advisor.get_recommendations(*args)
        assert result.to_dict() == {'makeup_look': 'unknown', 'color_tips': 'unknown'}
