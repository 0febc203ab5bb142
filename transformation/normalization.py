"""
Coordinate Normalization

월드 좌표 -> [-1, 1] 근사 범위 정규화
- normalize: 2 * value / extent - 1
- 속도 성분 보정 (상류 단위 오류 보정 휴리스틱)
"""

from dataclasses import dataclass
from typing import Tuple

from transformation.spec import VELOCITY_LIMIT, VELOCITY_SCALE


def normalize(value: float, extent: float) -> float:
    """
    좌표 하나를 정규화

    extent는 설정 단계에서 0이 아님이 보장되어야 합니다.
    """
    return 2.0 * value / extent - 1.0


def normalize_point(x: float, y: float, width: float, height: float) -> Tuple[float, float]:
    """(x, y)를 가로/세로 크기로 각각 정규화"""
    return normalize(x, width), normalize(y, height)


def correct_velocity(component: float) -> float:
    """|v| > 10 인 속도 성분은 1000으로 나눔"""
    if abs(component) > VELOCITY_LIMIT:
        return component / VELOCITY_SCALE
    return component


def correct_velocity_pair(vx: float, vy: float) -> Tuple[float, float]:
    return correct_velocity(vx), correct_velocity(vy)


@dataclass(frozen=True)
class WorldNormalizer:
    """전역 영역 크기 기반 정규화기"""
    width: float
    height: float

    def point(self, x: float, y: float) -> Tuple[float, float]:
        return normalize_point(x, y, self.width, self.height)
