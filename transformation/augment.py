"""
Flip Augmentation

대칭성을 이용한 데이터 증강 (ego 로봇 행에만 적용)
- IDENTITY: 변화 없음
- ROTATE_90: (x, y) -> (y, 1 - x), 방향각 + pi/4
- ROTATE_180: (x, y) -> (1 - x, 1 - y), 방향각 + pi/2
- ROTATE_270: (x, y) -> (1 - y, x), 방향각 - pi/4

위치, 속도, goal 세 쌍에 동일한 변환을 적용하고 방향은
atan2(quat_z, quat_w) 각도에서 다시 (sin, cos) 쌍으로 인코딩합니다.
이웃 에이전트 행에는 적용하지 않습니다.
"""

from dataclasses import dataclass, replace
from typing import Callable, Dict, Tuple
import math

from transformation.spec import FlipProfile

Pair = Tuple[float, float]


@dataclass(frozen=True)
class EgoFrame:
    """정규화된 ego 상태"""
    ego_x: float
    ego_y: float
    vel_x: float
    vel_y: float
    goal_x: float
    goal_y: float
    quat_z: float
    quat_w: float

    @property
    def angle(self) -> float:
        return math.atan2(self.quat_z, self.quat_w)


def _rotate_90(x: float, y: float) -> Pair:
    return y, 1 - x


def _rotate_180(x: float, y: float) -> Pair:
    return 1 - x, 1 - y


def _rotate_270(x: float, y: float) -> Pair:
    return 1 - y, x


# 프로파일 -> (좌표 변환, 방향각 오프셋)
FLIP_TABLE: Dict[FlipProfile, Tuple[Callable[[float, float], Pair], float]] = {
    FlipProfile.ROTATE_90: (_rotate_90, math.pi / 4),
    FlipProfile.ROTATE_180: (_rotate_180, math.pi / 2),
    FlipProfile.ROTATE_270: (_rotate_270, -math.pi / 4),
}


def flip_frame(frame: EgoFrame, profile: FlipProfile) -> EgoFrame:
    """EgoFrame에 flip 프로파일 적용 (순수 함수)"""
    if profile is FlipProfile.IDENTITY:
        return frame

    transform, offset = FLIP_TABLE[profile]
    ego_x, ego_y = transform(frame.ego_x, frame.ego_y)
    vel_x, vel_y = transform(frame.vel_x, frame.vel_y)
    goal_x, goal_y = transform(frame.goal_x, frame.goal_y)
    angle = frame.angle + offset

    return replace(
        frame,
        ego_x=ego_x,
        ego_y=ego_y,
        vel_x=vel_x,
        vel_y=vel_y,
        goal_x=goal_x,
        goal_y=goal_y,
        quat_z=math.sin(angle),
        quat_w=math.cos(angle),
    )


class FlipAugmenter:
    """
    실행 단위로 고정된 flip 프로파일 적용기

    프로파일은 생성 시 한 번 정해지고 바뀌지 않습니다.
    """

    def __init__(self, profile: FlipProfile = FlipProfile.IDENTITY):
        self._profile = FlipProfile(profile)

    @property
    def profile(self) -> FlipProfile:
        return self._profile

    def apply(self, frame: EgoFrame) -> EgoFrame:
        return flip_frame(frame, self._profile)
