"""
Storage 패키지

데이터셋 파일 저장 및 후처리
"""

from storage.dataset_writer import DatasetWriter, dataset_path
from storage.transposer import DatasetTransposer, transposed_path

__all__ = [
    "DatasetWriter",
    "dataset_path",
    "DatasetTransposer",
    "transposed_path",
]
