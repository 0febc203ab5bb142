"""
테스트 설정 및 픽스처
"""

import os
import pytest
import tempfile
import shutil
from pathlib import Path

# 테스트 환경 설정 - 모든 import 이전에 설정
_session_dir = Path(tempfile.mkdtemp(prefix="pedsim-tests-"))
os.environ["ENVIRONMENT"] = "test"
os.environ["LOGS_DIR"] = str(_session_dir / "logs")
os.environ["DATA_DIR"] = str(_session_dir / "data")

from schemas.contracts import AgentObservation, GoalUpdate, TrackedAgentsBatch
from transformation.spec import DataSaverConfig


@pytest.fixture(scope="function")
def temp_dir():
    """임시 디렉토리 생성"""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path)


@pytest.fixture
def saver_config():
    """기본 데이터 세이버 설정"""
    return DataSaverConfig(
        local_width=12.0,
        local_height=12.0,
        global_width=50.0,
        global_height=50.0,
        flip=1,
        path="pedsim_pos",
        size=100.0,
    )


def make_agent(track_id, x, y, vx=0.0, vy=0.0, qz=0.0, qw=1.0):
    return AgentObservation(track_id=track_id, x=x, y=y, vx=vx, vy=vy, qz=qz, qw=qw)


def make_batch(*agents, stamp=None):
    return TrackedAgentsBatch(tracks=tuple(agents), stamp=stamp)


@pytest.fixture
def scenario_events():
    """
    배치1 (goal 전) -> goal (3, 3) -> 배치2 -> 배치3

    배치2/3: 로봇 (1, 1), 영역 안 이웃 1명, 영역 밖 이웃 1명
    """
    robot = make_agent(0, 1.0, 1.0, vx=0.5, vy=0.2)
    inside = make_agent(4, 2.0, 2.0, vx=0.3, vy=-0.1)
    outside = make_agent(7, 30.0, 30.0)
    return [
        make_batch(robot, inside, outside, stamp=0.0),
        GoalUpdate(3.0, 3.0),
        make_batch(robot, inside, outside, stamp=0.4),
        make_batch(robot, inside, outside, stamp=0.8),
    ]


def pytest_sessionfinish(session, exitstatus):
    shutil.rmtree(_session_dir, ignore_errors=True)
