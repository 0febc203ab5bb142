"""
데이터 계약(Contract) 정의

데이터 세이버가 외부(트래커, goal 퍼블리셔)로부터 받는 입력 형식

A. tracks 이벤트 - 동시에 관측된 에이전트 배치 (첫 항목은 항상 로봇)
B. goal 이벤트 - 로봇 goal 갱신

녹화 파일 형식: recording.jsonl (한 줄에 이벤트 하나)
    {"type": "tracks", "stamp": 1.0, "tracks": [{"track_id": 0, "x": 1.0, ...}, ...]}
    {"type": "goal", "x": 3.0, "y": 3.0}
"""

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Tuple, Union
import json

from errors import MalformedBatchError


@dataclass(frozen=True)
class AgentObservation:
    """
    에이전트 하나의 관측값

    방향은 평면 회전 쿼터니언의 z, w 성분만 사용합니다.
    """
    track_id: int
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    qz: float = 0.0
    qw: float = 1.0

    @property
    def position(self) -> Tuple[float, float]:
        return self.x, self.y

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AgentObservation":
        try:
            observation = cls(
                track_id=int(data["track_id"]),
                x=float(data["x"]),
                y=float(data["y"]),
                vx=float(data.get("vx", 0.0)),
                vy=float(data.get("vy", 0.0)),
                qz=float(data.get("qz", 0.0)),
                qw=float(data.get("qw", 1.0)),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedBatchError(f"invalid agent observation {data!r}: {e}") from e
        # agent_id = track_id + 1 이 항상 1 이상이어야 함 (0은 예약)
        if observation.track_id < 0:
            raise MalformedBatchError(f"track_id must be non-negative: {data!r}")
        return observation


@dataclass(frozen=True)
class TrackedAgentsBatch:
    """A. 동시 관측 배치 (로봇 먼저)"""
    tracks: Tuple[AgentObservation, ...]
    stamp: Optional[float] = None

    @property
    def robot(self) -> AgentObservation:
        if not self.tracks:
            raise MalformedBatchError("batch has no observations; robot is undefined")
        return self.tracks[0]

    @property
    def neighbors(self) -> Tuple[AgentObservation, ...]:
        return self.tracks[1:]

    def __len__(self) -> int:
        return len(self.tracks)

    def to_jsonl(self) -> str:
        """JSONL 형식으로 변환"""
        return json.dumps({
            "type": "tracks",
            "stamp": self.stamp,
            "tracks": [t.to_dict() for t in self.tracks],
        })

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TrackedAgentsBatch":
        tracks = data.get("tracks")
        if not isinstance(tracks, list):
            raise MalformedBatchError(f"tracks event without a track list: {data!r}")
        return cls(
            tracks=tuple(AgentObservation.from_dict(t) for t in tracks),
            stamp=data.get("stamp"),
        )


@dataclass(frozen=True)
class GoalUpdate:
    """B. 로봇 goal 갱신 (월드 좌표)"""
    x: float
    y: float

    def to_jsonl(self) -> str:
        return json.dumps({"type": "goal", "x": self.x, "y": self.y})

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GoalUpdate":
        try:
            return cls(x=float(data["x"]), y=float(data["y"]))
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedBatchError(f"invalid goal update {data!r}: {e}") from e


Event = Union[TrackedAgentsBatch, GoalUpdate]


def parse_event(data: Dict[str, Any]) -> Event:
    """딕셔너리 이벤트를 계약 객체로 변환"""
    event_type = data.get("type")
    if event_type == "tracks":
        return TrackedAgentsBatch.from_dict(data)
    if event_type == "goal":
        return GoalUpdate.from_dict(data)
    raise MalformedBatchError(f"unknown event type: {event_type!r}")


def read_events(path: Union[str, Path]) -> Iterator[Event]:
    """
    JSONL 녹화 파일에서 이벤트를 순서대로 읽기

    빈 줄은 건너뛰고, 잘못된 줄은 줄 번호와 함께 MalformedBatchError를 발생시킵니다.
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        for line_no, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                data = json.loads(line)
            except json.JSONDecodeError as e:
                raise MalformedBatchError(f"{path}:{line_no}: invalid JSON ({e})") from e
            if not isinstance(data, dict):
                raise MalformedBatchError(f"{path}:{line_no}: event must be a JSON object")
            yield parse_event(data)
