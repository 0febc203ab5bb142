"""
Dataset Collector

두 단계 수명 주기
1. 수집: 이벤트(관측 배치, goal 갱신)를 도착 순서대로 처리하고 행을 기록
   - 매 wake마다 종료 조건(frame_counter >= size) 확인
   - 데이터셋 파일은 어떤 경로로 빠져나가든 반드시 닫힘
2. Transpose: 파일이 닫힌 뒤 정확히 한 번 실행
"""

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from core.logging_config import setup_logger
from errors import DataSaverError, TransposeError
from schemas.contracts import Event, GoalUpdate, TrackedAgentsBatch
from storage.dataset_writer import DatasetWriter, dataset_path
from storage.transposer import DatasetTransposer
from transformation.frame_processor import FrameProcessor, ProcessorState
from transformation.spec import CollectorPhase, DataSaverConfig

logger = setup_logger(__name__)


@dataclass
class CollectionResult:
    """수집 결과"""
    dataset_path: Path
    frames: int
    rows: int
    batches_received: int
    batches_dropped: int
    completed: bool
    transposed_path: Optional[Path] = None


class DataCollector:
    """
    관측 스트림 -> 데이터셋 수집기

    단일 스레드에서 이벤트를 순서대로 처리하므로 잠금이 필요 없습니다.
    """

    def __init__(
        self,
        config: Optional[DataSaverConfig] = None,
        output_dir: Optional[Path] = None,
        transposer: Optional[DatasetTransposer] = None,
    ):
        self.config = (config or DataSaverConfig()).validate()
        self.processor = FrameProcessor(self.config)
        self.transposer = transposer or DatasetTransposer()

        path = dataset_path(self.config.path, self.config.size, self.config.flip)
        if output_dir is not None:
            path = Path(output_dir) / path
        self.writer = DatasetWriter(path)

        self.state: ProcessorState = self.processor.initial_state()
        self.batches_received = 0
        self.batches_dropped = 0
        self._transposed: Optional[Path] = None

        logger.info(
            f"Data collector ready: flip={self.config.flip_profile.name}, "
            f"size={int(self.config.size)}, robot_frame={self.config.robot_frame}, "
            f"output={self.writer.filepath}"
        )

    @property
    def frame_counter(self) -> int:
        return self.state.frame_counter

    @property
    def phase(self) -> CollectorPhase:
        return self.processor.phase(self.state)

    def should_stop(self) -> bool:
        """종료 조건: 기록된 프레임 수가 목표 크기에 도달"""
        return self.state.frame_counter >= self.config.size

    # ----- 수집 단계 -----

    def start(self) -> None:
        self.writer.open()

    def on_goal(self, goal: GoalUpdate) -> None:
        self.state = self.processor.update_goal(self.state, goal)

    def on_tracked_agents(self, batch: TrackedAgentsBatch) -> int:
        """
        관측 배치 처리

        Returns:
            기록된 행 수
        """
        self.batches_received += 1
        self.state, rows = self.processor.process_batch(self.state, batch)
        if not rows:
            self.batches_dropped += 1
            return 0
        return self.writer.write_rows(rows)

    def dispatch(self, event: Event) -> None:
        if isinstance(event, GoalUpdate):
            self.on_goal(event)
        elif isinstance(event, TrackedAgentsBatch):
            self.on_tracked_agents(event)
        else:
            raise TypeError(f"Unsupported event: {type(event).__name__}")

    def collect(self, events: Iterable[Event], realtime: bool = False) -> bool:
        """
        이벤트 스트림 처리

        Args:
            events: 도착 순서의 이벤트
            realtime: True면 wake 사이에 1/rate 초 대기

        Returns:
            목표 크기 도달 여부
        """
        period = 1.0 / self.config.rate
        self.start()
        try:
            for event in events:
                if self.should_stop():
                    break
                tick = time.perf_counter()
                self.dispatch(event)
                if realtime:
                    sleep_for = period - (time.perf_counter() - tick)
                    if sleep_for > 0:
                        time.sleep(sleep_for)
        finally:
            self.writer.close()

        completed = self.should_stop()
        if completed:
            logger.info(f"Target size reached: {self.frame_counter} frames")
        else:
            logger.warning(
                f"Event stream ended before target size: "
                f"{self.frame_counter}/{int(self.config.size)} frames"
            )
        return completed

    # ----- transpose 단계 -----

    def finish(self) -> Path:
        """
        닫힌 데이터셋을 transpose (한 번만)

        Raises:
            DataSaverError: 파일이 아직 열려 있거나 이미 transpose된 경우
            TransposeError: 데이터셋 형식 오류
        """
        if self.writer.is_open:
            raise DataSaverError("Dataset sink must be closed before transposing")
        if self._transposed is not None:
            raise DataSaverError(f"Dataset already transposed: {self._transposed}")
        try:
            self._transposed = self.transposer.transpose(self.writer.filepath)
        except TransposeError as e:
            logger.error(f"Transpose failed; frame-major dataset kept at {self.writer.filepath}: {e}")
            raise
        return self._transposed

    def run(
        self,
        events: Iterable[Event],
        realtime: bool = False,
        transpose: bool = True,
    ) -> CollectionResult:
        """
        전체 수명 주기 실행 (수집 -> transpose)

        Args:
            events: 이벤트 스트림
            realtime: wake 주기 대기 여부
            transpose: transpose 단계 실행 여부 (목표 크기 미달로 끝나도 실행)
        """
        completed = self.collect(events, realtime=realtime)

        transposed = None
        if transpose:
            transposed = self.finish()

        return CollectionResult(
            dataset_path=self.writer.filepath,
            frames=self.frame_counter,
            rows=self.writer.rows_written,
            batches_received=self.batches_received,
            batches_dropped=self.batches_dropped,
            completed=completed,
            transposed_path=transposed,
        )
