"""
Transformation Settings and Schema

Flip 프로파일, 데이터셋 스키마, 데이터 세이버 설정 관리
"""

from dataclasses import dataclass
from typing import Any, Dict
from enum import Enum
import hashlib
import json
import math

from config import config as app_config
from errors import ConfigurationError


VERSION = "1.0.0"


class FlipProfile(Enum):
    """Flip 증강 프로파일 (설정값 1~4)"""
    IDENTITY = 1
    ROTATE_90 = 2
    ROTATE_180 = 3
    ROTATE_270 = 4


class CollectorPhase(Enum):
    """프레임 처리 단계"""
    AWAITING_GOAL = "awaiting-goal"
    COLLECTING = "collecting"


# 데이터셋 컬럼 순서 (frame-major CSV)
DATASET_COLUMNS = [
    "frame_index",
    "agent_id",  # track_id + 1
    "pos_y",
    "pos_x",
    "vel_x",
    "vel_y",
    "quat_z",
    "quat_w",
    "goal_x",
    "goal_y",
]

# 속도 보정: 이 값보다 큰 성분은 VELOCITY_SCALE로 나눔
VELOCITY_LIMIT = 10.0
VELOCITY_SCALE = 1000.0

# 로컬 영역 경계 여유값 (음수 -> 경계 안쪽만 포함)
LOCAL_ZONE_MARGIN = -0.00001

# 정규화된 goal이 이 값보다 커야 유효한 goal로 간주
GOAL_GATE_THRESHOLD = -0.99

FLOAT_FIELDS = ("local_width", "local_height", "global_width", "global_height", "rate", "size")


def _to_float(name: str, value: Any) -> float:
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from e


def _to_int(name: str, value: Any) -> int:
    """정수 변환 (2.7 같은 값은 잘라내지 않고 거부)"""
    number = _to_float(name, value)
    if not number.is_integer():
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    return int(number)


@dataclass
class DataSaverConfig:
    """데이터 세이버 설정"""
    robot_frame: str = "base_link"  # 선언만 되고 사용되지 않음

    # 로컬 영역 (이웃 필터)
    local_width: float = 12.0
    local_height: float = 12.0

    # 전역 영역 (정규화)
    global_width: float = 50.0
    global_height: float = 50.0

    # 종료 조건 확인 주기 (Hz)
    rate: float = 2.5

    # Flip 프로파일 (1~4)
    flip: int = 1

    # 데이터셋
    path: str = "pedsim_pos"
    size: float = 100.0

    @property
    def flip_profile(self) -> FlipProfile:
        return FlipProfile(self.flip)

    def validate(self) -> "DataSaverConfig":
        """설정 검증 (실패 시 ConfigurationError)"""
        for name in FLOAT_FIELDS:
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise ConfigurationError(f"{name} must be positive and finite, got {value}")
        if self.flip not in {p.value for p in FlipProfile}:
            raise ConfigurationError(f"flip must be one of 1-4, got {self.flip}")
        if not self.path:
            raise ConfigurationError("dataset path must not be empty")
        return self

    def to_dict(self) -> Dict[str, Any]:
        """설정을 딕셔너리로 변환"""
        return {
            "robot_frame": self.robot_frame,
            "local_width": self.local_width,
            "local_height": self.local_height,
            "global_width": self.global_width,
            "global_height": self.global_height,
            "rate": self.rate,
            "flip": self.flip,
            "path": self.path,
            "size": self.size,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DataSaverConfig":
        """
        딕셔너리에서 설정 생성 (없는 키는 기본값 유지)

        Raises:
            ConfigurationError: 숫자로 변환할 수 없거나 정수가 아닌 flip
        """
        cfg = cls()
        for key in cfg.to_dict():
            if key in data and data[key] is not None:
                setattr(cfg, key, data[key])
        cfg.flip = _to_int("flip", cfg.flip)
        for key in FLOAT_FIELDS:
            setattr(cfg, key, _to_float(key, getattr(cfg, key)))
        cfg.robot_frame = str(cfg.robot_frame)
        cfg.path = str(cfg.path)
        return cfg

    @classmethod
    def from_env(cls) -> "DataSaverConfig":
        """환경 변수 (.env 포함) 기반 설정"""
        return cls.from_dict({
            "robot_frame": app_config.DATA_SAVER_ROBOT_FRAME,
            "local_width": app_config.DATA_SAVER_LOCAL_WIDTH,
            "local_height": app_config.DATA_SAVER_LOCAL_HEIGHT,
            "global_width": app_config.DATA_SAVER_GLOBAL_WIDTH,
            "global_height": app_config.DATA_SAVER_GLOBAL_HEIGHT,
            "rate": app_config.DATA_SAVER_RATE,
            "flip": app_config.DATA_SAVER_FLIP,
            "path": app_config.DATA_SAVER_PATH,
            "size": app_config.DATA_SAVER_SIZE,
        })

    def get_params_hash(self) -> str:
        """설정 해시 생성 (재현성용)"""
        config_str = json.dumps(self.to_dict(), sort_keys=True)
        return hashlib.md5(config_str.encode()).hexdigest()[:8]


def create_default_config() -> DataSaverConfig:
    """기본 설정 생성"""
    return DataSaverConfig()


def load_config_from_yaml(yaml_path: str, base: DataSaverConfig = None) -> DataSaverConfig:
    """
    YAML 파일에서 설정 로드

    `data_saver:` 섹션이 있으면 그 내용을, 없으면 최상위 키를 사용합니다.
    base가 주어지면 YAML에 없는 값은 base 값을 유지합니다.
    """
    import yaml
    try:
        with open(yaml_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Cannot read config file {yaml_path}: {e}") from e
    if isinstance(data, dict) and "data_saver" in data:
        data = data["data_saver"] or {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {yaml_path} must contain a mapping")
    if base is not None:
        merged = base.to_dict()
        merged.update({k: v for k, v in data.items() if v is not None})
        data = merged
    return DataSaverConfig.from_dict(data)


def save_config_to_yaml(cfg: DataSaverConfig, yaml_path: str) -> None:
    """설정을 YAML 파일로 저장"""
    import yaml
    with open(yaml_path, "w", encoding="utf-8") as f:
        yaml.dump({"data_saver": cfg.to_dict()}, f, default_flow_style=False, allow_unicode=True)
