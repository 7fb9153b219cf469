"""상황/지역/팔레트 기반 메이크업 룩 추천"""

from dataclasses import dataclass
from typing import Dict, Optional

UNKNOWN = "unknown"


@dataclass
class MakeupRecommendation:
    """추천 결과"""

    makeup_look: str = UNKNOWN
    color_tips: str = UNKNOWN

    def to_dict(self) -> Dict[str, str]:
        return {'makeup_look': self.makeup_look, 'color_tips': self.color_tips}


class MakeupAdvisor:
    """
    규칙 기반 메이크업 추천

    입력 중 하나라도 비어 있으면 unknown/unknown
    """

    # 상황 → 룩
    OCCASION_LOOKS: Dict[str, str] = {
        "daily": "Natural/Minimal",
        "office": "Natural/Minimal",
        "parties": "Glam/Bold",
        "weddings": "Glam/Bold",
        "fashion events": "Trendy/Editorial",
    }

    # 지역 조건이 붙는 상황
    TRADITIONAL_OCCASIONS = ("festivals", "rituals")
    TRADITIONAL_REGIONS = ("Indian", "Asian")

    PALETTE_TIPS: Dict[str, str] = {
        "neutral": "Nude tones, light blush",
        "warm tones": "warm tones",
        "cool tones": "cool tones",
    }

    def get_recommendations(
        self,
        occasion: Optional[str],
        region: Optional[str],
        style: Optional[str],
        palette: Optional[str]
    ) -> MakeupRecommendation:
        """
        메이크업 추천

        Args:
            occasion: 'daily', 'office', 'parties', 'weddings', 'festivals', 'rituals', 'fashion events'
            region: 'Indian', 'Asian', ...
            style: 사용자 스타일 (현재 규칙에서는 필수 여부만 확인)
            palette: 'neutral', 'warm tones', 'cool tones'

        Returns:
            MakeupRecommendation
        """
        if not occasion or not region or not style or not palette:
            return MakeupRecommendation()

        return MakeupRecommendation(
            makeup_look=self.recommend_look(occasion, region),
            color_tips=self.PALETTE_TIPS.get(palette, UNKNOWN),
        )

    def recommend_look(self, occasion: str, region: str) -> str:
        if occasion in self.OCCASION_LOOKS:
            return self.OCCASION_LOOKS[occasion]
        if occasion in self.TRADITIONAL_OCCASIONS and region in self.TRADITIONAL_REGIONS:
            return "Ethnic/Traditional"
        return UNKNOWN
