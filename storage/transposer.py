"""
Dataset Transposer

수집이 끝난 frame-major CSV를 한 번만 읽어 전치(transpose)된 레이아웃으로
저장합니다. 입력 파일의 각 컬럼이 출력 파일의 한 행이 됩니다.

    frame_index   : 0, 0, 1, 1, ...
    agent_id      : 1, 3, 1, 3, ...
    pos_y         : ...
    ...
    goal_y        : ...

입력 frame-major 파일은 절대 수정하지 않습니다.
"""

import csv
import math
from pathlib import Path
from typing import List, Optional, Union

import numpy as np

from core.logging_config import setup_logger
from errors import TransposeError
from transformation.spec import DATASET_COLUMNS

logger = setup_logger(__name__)

# 정수로 기록할 컬럼 (frame_index, agent_id)
INTEGER_COLUMNS = (0, 1)


def transposed_path(source: Union[str, Path]) -> Path:
    source = Path(source)
    return source.with_name(f"{source.stem}_transposed{source.suffix}")


class DatasetTransposer:
    """frame-major CSV -> 에이전트 인덱스 기반 wide 레이아웃"""

    def __init__(self, expected_width: Optional[int] = len(DATASET_COLUMNS)):
        """
        Args:
            expected_width: 행당 기대 필드 수 (None이면 첫 행 기준)
        """
        self.expected_width = expected_width

    def load(self, source: Union[str, Path]) -> np.ndarray:
        """
        frame-major CSV를 [N, W] 배열로 읽기

        Raises:
            TransposeError: 행 폭 불일치, 숫자가 아닌 값, 정수가 아닌 frame_index/agent_id
        """
        source = Path(source)
        if not source.exists():
            raise TransposeError(f"Dataset file not found: {source}")

        records: List[List[float]] = []
        width = self.expected_width

        with open(source, "r", newline="", encoding="utf-8") as f:
            for line_no, fields in enumerate(csv.reader(f), start=1):
                if not fields:
                    continue
                # 끝에 붙은 구분자 허용 (a,b,c,)
                if fields[-1] == "":
                    fields = fields[:-1]
                if width is None:
                    width = len(fields)
                if len(fields) != width:
                    raise TransposeError(
                        f"{source}:{line_no}: expected {width} fields, got {len(fields)}"
                    )
                try:
                    values = [float(v) for v in fields]
                except ValueError as e:
                    raise TransposeError(f"{source}:{line_no}: non-numeric value ({e})") from e
                for col in INTEGER_COLUMNS:
                    if col < len(values) and not (
                        math.isfinite(values[col]) and values[col].is_integer()
                    ):
                        raise TransposeError(
                            f"{source}:{line_no}: column {col} must be a whole number, got {fields[col]!r}"
                        )
                records.append(values)

        if not records:
            return np.empty((0, width or 0))
        return np.asarray(records, dtype=np.float64)

    def transpose(
        self,
        source: Union[str, Path],
        output: Optional[Union[str, Path]] = None,
    ) -> Path:
        """
        전치된 파일 생성

        Args:
            source: 닫힌 frame-major CSV 경로
            output: 출력 경로 (기본값: <stem>_transposed.csv)

        Returns:
            출력 파일 경로
        """
        data = self.load(source)
        output = Path(output) if output is not None else transposed_path(source)

        if data.shape[0] == 0:
            logger.warning(f"Dataset {source} has no records; writing empty transposed file")

        matrix = data.T if data.shape[0] else np.empty((0, 0))  # [W, N]

        with open(output, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f, lineterminator="\n")
            for col_idx, values in enumerate(matrix):
                if col_idx in INTEGER_COLUMNS:
                    writer.writerow([int(v) for v in values])
                else:
                    writer.writerow([float(v) for v in values])

        logger.info(
            f"Transposed {source} ({data.shape[0]} records x {data.shape[1]} fields) -> {output}"
        )
        return output
