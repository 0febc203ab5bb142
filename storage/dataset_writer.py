"""
Dataset Writer

프레임 처리 결과 행을 frame-major CSV 파일에 순서대로 추가합니다.
파일은 수집 시작 시 한 번 열리고 종료 시 한 번 닫힙니다.
"""

import csv
from pathlib import Path
from typing import Iterable, Optional, Union

from core.logging_config import setup_logger
from errors import DatasetSinkError
from transformation.frame_processor import DatasetRow

logger = setup_logger(__name__)


def dataset_path(path: Union[str, Path], size: float, flip: int) -> Path:
    """
    데이터셋 파일 경로 생성

    크기와 flip 번호를 이어 붙입니다: pedsim_pos, 100, 1 -> pedsim_pos_1001.csv
    """
    return Path(f"{path}_{int(size)}{int(flip)}.csv")


class DatasetWriter:
    """frame-major CSV 데이터셋 저장 클래스"""

    DELIMITER = ","
    TERMINATOR = "\n"

    def __init__(self, filepath: Union[str, Path]):
        """
        Args:
            filepath: 저장할 CSV 파일 경로 (기존 파일은 덮어씀)
        """
        self.filepath = Path(filepath)
        self.rows_written = 0
        self._handle = None
        self._writer = None
        self._closed = False

    @property
    def is_open(self) -> bool:
        return self._handle is not None

    def open(self) -> "DatasetWriter":
        """파일 열기 (실패 시 DatasetSinkError)"""
        if self._closed:
            raise DatasetSinkError(f"Dataset sink already closed: {self.filepath}")
        if self._handle is not None:
            return self
        try:
            self.filepath.parent.mkdir(parents=True, exist_ok=True)
            self._handle = open(self.filepath, "w", newline="", encoding="utf-8")
        except OSError as e:
            raise DatasetSinkError(f"Cannot open dataset sink {self.filepath}: {e}") from e

        self._writer = csv.writer(
            self._handle,
            delimiter=self.DELIMITER,
            lineterminator=self.TERMINATOR,
        )
        logger.info(f"Dataset sink opened: {self.filepath}")
        return self

    def write_row(self, row: DatasetRow) -> None:
        """행 하나 추가"""
        if self._writer is None:
            raise DatasetSinkError(f"Dataset sink is not open: {self.filepath}")
        try:
            self._writer.writerow(row.as_record())
        except OSError as e:
            raise DatasetSinkError(f"Failed to write to {self.filepath}: {e}") from e
        self.rows_written += 1

    def write_rows(self, rows: Iterable[DatasetRow]) -> int:
        """
        여러 행 추가

        Returns:
            추가된 행 수
        """
        count = 0
        for row in rows:
            self.write_row(row)
            count += 1
        return count

    def flush(self) -> None:
        if self._handle is not None:
            self._handle.flush()

    def close(self) -> None:
        """파일 닫기 (여러 번 호출해도 안전)"""
        if self._handle is None:
            self._closed = True
            return
        try:
            self._handle.flush()
            self._handle.close()
        finally:
            self._handle = None
            self._writer = None
            self._closed = True
        logger.info(f"Dataset sink closed: {self.filepath} ({self.rows_written} rows)")

    def __enter__(self) -> "DatasetWriter":
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb) -> Optional[bool]:
        self.close()
        return None
