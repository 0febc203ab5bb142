"""
Frame Processing

관측 배치 하나를 데이터셋 행으로 변환
1. 첫 관측(로봇)으로 로봇 위치 갱신
2. goal 게이트: 유효한 goal을 받기 전의 배치는 버림
3. ego 행: 정규화 + 속도 보정 + flip
4. 이웃 행: 로컬 영역 필터 + 정규화 + 속도 보정 (flip 없음, goal = 0)
5. 프레임 카운터 1 증가

상태(로봇 위치, goal, 카운터)는 ProcessorState로 명시적으로 주고받습니다.
"""

from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence, Tuple, Union

from core.logging_config import setup_logger
from errors import MalformedBatchError
from schemas.contracts import AgentObservation, GoalUpdate, TrackedAgentsBatch
from transformation.augment import EgoFrame, FlipAugmenter
from transformation.local_zone import LocalZoneFilter
from transformation.normalization import WorldNormalizer, correct_velocity_pair
from transformation.spec import CollectorPhase, DataSaverConfig, GOAL_GATE_THRESHOLD

logger = setup_logger(__name__)


@dataclass(frozen=True)
class RobotState:
    """로봇의 마지막 위치와 goal (월드 좌표)"""
    position: Tuple[float, float] = (0.0, 0.0)
    goal: Tuple[float, float] = (0.0, 0.0)


@dataclass(frozen=True)
class ProcessorState:
    """배치 처리 사이에 전달되는 상태"""
    robot: RobotState = field(default_factory=RobotState)
    frame_counter: int = 0


@dataclass(frozen=True)
class DatasetRow:
    """데이터셋 한 행 (컬럼 순서는 DATASET_COLUMNS)"""
    frame_index: int
    agent_id: int  # track_id + 1
    pos_y: float
    pos_x: float
    vel_x: float
    vel_y: float
    quat_z: float
    quat_w: float
    goal_x: float = 0.0
    goal_y: float = 0.0

    def as_record(self) -> Tuple[Union[int, float], ...]:
        return (
            self.frame_index,
            self.agent_id,
            self.pos_y,
            self.pos_x,
            self.vel_x,
            self.vel_y,
            self.quat_z,
            self.quat_w,
            self.goal_x,
            self.goal_y,
        )


class FrameProcessor:
    """
    관측 배치 -> 데이터셋 행 변환기

    순수한 변환만 담당하고 파일 I/O는 하지 않습니다. 각 호출은 새 상태를
    반환하며 입력 상태는 바뀌지 않습니다.
    """

    def __init__(self, config: Optional[DataSaverConfig] = None):
        self.config = config or DataSaverConfig()
        self.normalizer = WorldNormalizer(self.config.global_width, self.config.global_height)
        self.zone = LocalZoneFilter(self.config.local_width, self.config.local_height)
        self.augmenter = FlipAugmenter(self.config.flip_profile)

    def initial_state(self) -> ProcessorState:
        return ProcessorState()

    def normalized_goal(self, state: ProcessorState) -> Tuple[float, float]:
        return self.normalizer.point(*state.robot.goal)

    def has_goal(self, state: ProcessorState) -> bool:
        """정규화된 goal이 (-1, -1) 근처가 아니면 유효한 goal"""
        goal_x, goal_y = self.normalized_goal(state)
        return goal_x > GOAL_GATE_THRESHOLD or goal_y > GOAL_GATE_THRESHOLD

    def phase(self, state: ProcessorState) -> CollectorPhase:
        if self.has_goal(state):
            return CollectorPhase.COLLECTING
        return CollectorPhase.AWAITING_GOAL

    def update_goal(self, state: ProcessorState, goal: GoalUpdate) -> ProcessorState:
        """goal 갱신. 행을 만들지 않고 카운터도 그대로"""
        robot = replace(state.robot, goal=(goal.x, goal.y))
        logger.debug(f"Goal updated: ({goal.x:.3f}, {goal.y:.3f})")
        return replace(state, robot=robot)

    def process_batch(
        self,
        state: ProcessorState,
        batch: Union[TrackedAgentsBatch, Sequence[AgentObservation]],
    ) -> Tuple[ProcessorState, List[DatasetRow]]:
        """
        배치 하나 처리

        Args:
            state: 현재 상태
            batch: 관측 배치 (첫 항목이 로봇)

        Returns:
            (새 상태, 이 배치에서 나온 행 목록)

        Raises:
            MalformedBatchError: 관측이 하나도 없는 배치
        """
        tracks = batch.tracks if isinstance(batch, TrackedAgentsBatch) else tuple(batch)
        if not tracks:
            raise MalformedBatchError("received a batch with no observations")

        robot = tracks[0]
        state = replace(state, robot=replace(state.robot, position=robot.position))

        if not self.has_goal(state):
            logger.debug("Batch dropped: no valid goal received yet")
            return state, []

        frame_index = state.frame_counter
        rows = [self._ego_row(state, robot, frame_index)]

        for neighbor in tracks[1:]:
            if self.zone.contains(state.robot.position, neighbor.position):
                rows.append(self._neighbor_row(neighbor, frame_index))

        logger.debug(f"Frame {frame_index}: {len(rows)} rows ({len(tracks) - 1} neighbors observed)")
        return replace(state, frame_counter=frame_index + 1), rows

    def _ego_row(self, state: ProcessorState, robot: AgentObservation, frame_index: int) -> DatasetRow:
        ego_x, ego_y = self.normalizer.point(robot.x, robot.y)
        goal_x, goal_y = self.normalized_goal(state)
        vel_x, vel_y = correct_velocity_pair(robot.vx, robot.vy)

        frame = self.augmenter.apply(EgoFrame(
            ego_x=ego_x,
            ego_y=ego_y,
            vel_x=vel_x,
            vel_y=vel_y,
            goal_x=goal_x,
            goal_y=goal_y,
            quat_z=robot.qz,
            quat_w=robot.qw,
        ))

        return DatasetRow(
            frame_index=frame_index,
            agent_id=robot.track_id + 1,
            pos_y=frame.ego_y,
            pos_x=frame.ego_x,
            vel_x=frame.vel_x,
            vel_y=frame.vel_y,
            quat_z=frame.quat_z,
            quat_w=frame.quat_w,
            goal_x=frame.goal_x,
            goal_y=frame.goal_y,
        )

    def _neighbor_row(self, neighbor: AgentObservation, frame_index: int) -> DatasetRow:
        pos_x, pos_y = self.normalizer.point(neighbor.x, neighbor.y)
        vel_x, vel_y = correct_velocity_pair(neighbor.vx, neighbor.vy)
        return DatasetRow(
            frame_index=frame_index,
            agent_id=neighbor.track_id + 1,
            pos_y=pos_y,
            pos_x=pos_x,
            vel_x=vel_x,
            vel_y=vel_y,
            quat_z=neighbor.qz,
            quat_w=neighbor.qw,
        )
