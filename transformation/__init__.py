"""
Data Transformation

좌표 정규화, flip 증강, 로컬 영역 필터, 프레임 처리 모듈
"""

from transformation.normalization import (
    normalize,
    normalize_point,
    correct_velocity,
    WorldNormalizer,
)
from transformation.augment import (
    EgoFrame,
    FlipAugmenter,
    flip_frame,
)
from transformation.local_zone import (
    LocalZoneFilter,
    in_local_zone,
)
from transformation.frame_processor import (
    DatasetRow,
    FrameProcessor,
    ProcessorState,
    RobotState,
)
from transformation.spec import (
    CollectorPhase,
    DataSaverConfig,
    FlipProfile,
    DATASET_COLUMNS,
    VERSION,
)

__all__ = [
    # Normalization
    "normalize",
    "normalize_point",
    "correct_velocity",
    "WorldNormalizer",
    # Augmentation
    "EgoFrame",
    "FlipAugmenter",
    "flip_frame",
    # Local zone
    "LocalZoneFilter",
    "in_local_zone",
    # Frame processing
    "DatasetRow",
    "FrameProcessor",
    "ProcessorState",
    "RobotState",
    # Spec
    "CollectorPhase",
    "DataSaverConfig",
    "FlipProfile",
    "DATASET_COLUMNS",
    "VERSION",
]
