"""
데이터 계약(Contract) 스키마

외부 입력 형식을 먼저 고정
- tracks 이벤트: 에이전트 관측 배치 (로봇 먼저)
- goal 이벤트: 로봇 goal 갱신
"""

from schemas.contracts import (
    AgentObservation,
    TrackedAgentsBatch,
    GoalUpdate,
    Event,
    parse_event,
    read_events,
)

__all__ = [
    "AgentObservation",
    "TrackedAgentsBatch",
    "GoalUpdate",
    "Event",
    "parse_event",
    "read_events",
]
