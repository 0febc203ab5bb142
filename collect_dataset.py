#!/usr/bin/env python
"""
Pedsim Dataset Collection CLI

녹화된 관측 스트림(JSONL)을 재생하여 학습용 데이터셋 생성
- 로봇/보행자 좌표 정규화 및 flip 증강
- 로컬 영역 이웃 필터
- frame-major CSV 저장 후 transpose

사용법:
    python collect_dataset.py --input data/recordings/run.jsonl
    python collect_dataset.py --input run.jsonl --config data_saver.yaml --flip 3
    python collect_dataset.py --input run.jsonl --size 500 --realtime
    python collect_dataset.py --transpose pedsim_pos_1001.csv   # transpose만 실행
"""

import sys
import argparse
from pathlib import Path

# 프로젝트 루트 추가
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from collection.collector import DataCollector
from core.logging_config import setup_logger
from errors import DataSaverError, handle_error
from schemas.contracts import read_events
from storage.transposer import DatasetTransposer
from transformation.spec import DataSaverConfig, load_config_from_yaml

logger = setup_logger(__name__)


def build_config(args: argparse.Namespace) -> DataSaverConfig:
    """설정 우선순위: 기본값 < 환경 변수 < YAML < CLI"""
    cfg = DataSaverConfig.from_env()
    if args.config:
        cfg = load_config_from_yaml(args.config, base=cfg)

    overrides = {
        "flip": args.flip,
        "size": args.size,
        "path": args.path,
        "rate": args.rate,
    }
    data = cfg.to_dict()
    data.update({k: v for k, v in overrides.items() if v is not None})
    return DataSaverConfig.from_dict(data).validate()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Pedsim Dataset Collection")

    parser.add_argument("--input", help="JSONL 녹화 파일")
    parser.add_argument("--transpose", help="기존 frame-major CSV만 transpose")
    parser.add_argument("--config", help="YAML 설정 파일")
    parser.add_argument("--output-dir", help="데이터셋 출력 디렉토리")

    parser.add_argument("--flip", type=int, choices=[1, 2, 3, 4], help="Flip 프로파일")
    parser.add_argument("--size", type=float, help="목표 프레임 수")
    parser.add_argument("--path", help="데이터셋 파일 이름 접두사")
    parser.add_argument("--rate", type=float, help="wake 주기 (Hz)")

    parser.add_argument("--realtime", action="store_true", help="rate에 맞춰 재생")
    parser.add_argument("--no-transpose", action="store_true", help="transpose 단계 생략")

    args = parser.parse_args(argv)

    if args.transpose:
        try:
            output = DatasetTransposer().transpose(args.transpose)
        except DataSaverError as e:
            handle_error(e, context={"dataset": args.transpose}, reraise=False)
            print(f"\n❌ Transpose 실패: {e}")
            return 1
        print(f"\n✅ Transpose 완료: {output}")
        return 0

    if not args.input:
        parser.print_help()
        return 1

    try:
        cfg = build_config(args)
        collector = DataCollector(
            cfg,
            output_dir=Path(args.output_dir) if args.output_dir else None,
        )
        result = collector.run(
            read_events(args.input),
            realtime=args.realtime,
            transpose=not args.no_transpose,
        )
    except DataSaverError as e:
        handle_error(e, context={"input": args.input}, reraise=False)
        print(f"\n❌ 수집 실패: {e}")
        return 1

    status = "✅ 수집 완료" if result.completed else "⚠️  목표 크기 미달"
    print(f"\n{status}: {result.dataset_path}")
    print(f"   프레임: {result.frames}")
    print(f"   행: {result.rows}")
    print(f"   배치: {result.batches_received} (버림 {result.batches_dropped})")
    if result.transposed_path:
        print(f"   Transpose: {result.transposed_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
