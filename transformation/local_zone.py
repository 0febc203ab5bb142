"""
Local Zone Filter

로봇의 마지막 위치를 중심으로 한 사각형 로컬 영역 안에 있는
이웃 에이전트만 데이터셋에 기록합니다.
"""

from dataclasses import dataclass
from typing import Tuple

from transformation.spec import LOCAL_ZONE_MARGIN


def zone_distance(
    robot: Tuple[float, float],
    point: Tuple[float, float],
    width: float,
    height: float,
) -> float:
    """경계까지의 (체비셰프형) 거리. 음수면 영역 안쪽"""
    diff_width = abs(robot[0] - point[0]) - width / 2.0
    diff_height = abs(robot[1] - point[1]) - height / 2.0
    return max(diff_width, diff_height)


def in_local_zone(
    robot: Tuple[float, float],
    point: Tuple[float, float],
    width: float,
    height: float,
    margin: float = LOCAL_ZONE_MARGIN,
) -> bool:
    """
    point가 로봇 로컬 영역 안에 있는지 판정

    margin이 음수이므로 경계 위의 점은 제외되고, 두 축 모두에서
    반폭보다 엄격히 안쪽인 점만 포함됩니다.
    """
    return zone_distance(robot, point, width, height) <= margin


@dataclass(frozen=True)
class LocalZoneFilter:
    width: float
    height: float
    margin: float = LOCAL_ZONE_MARGIN

    def contains(self, robot: Tuple[float, float], point: Tuple[float, float]) -> bool:
        return in_local_zone(robot, point, self.width, self.height, self.margin)
