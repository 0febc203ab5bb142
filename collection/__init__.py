"""
Collection 패키지

관측 스트림 수집 및 데이터셋 수명 주기 관리
"""

from collection.collector import CollectionResult, DataCollector

__all__ = [
    "CollectionResult",
    "DataCollector",
]
