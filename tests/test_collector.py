"""
DataCollector 테스트 (수집 -> transpose 수명 주기)
"""

import pytest

from conftest import make_agent, make_batch
from collection.collector import DataCollector
from errors import ConfigurationError, DataSaverError, MalformedBatchError, TransposeError
from schemas.contracts import GoalUpdate
from transformation.spec import CollectorPhase, DataSaverConfig


def read_lines(path):
    return path.read_text(encoding="utf-8").splitlines()


class TestEndToEnd:
    """배치1 (goal 전) -> goal (3, 3) -> 배치2 -> 배치3"""

    def test_scenario_produces_four_rows(self, temp_dir, saver_config, scenario_events):
        collector = DataCollector(saver_config, output_dir=temp_dir)

        collector.start()
        collector.dispatch(scenario_events[0])
        assert collector.frame_counter == 0
        assert collector.phase is CollectorPhase.AWAITING_GOAL

        collector.dispatch(scenario_events[1])
        assert collector.phase is CollectorPhase.COLLECTING
        assert collector.frame_counter == 0

        collector.dispatch(scenario_events[2])
        assert collector.frame_counter == 1

        collector.dispatch(scenario_events[3])
        assert collector.frame_counter == 2
        collector.writer.close()

        lines = read_lines(collector.writer.filepath)
        assert len(lines) == 4
        assert [line.split(",")[:2] for line in lines] == [
            ["0", "1"], ["0", "5"], ["1", "1"], ["1", "5"],
        ]
        ego = lines[0].split(",")
        assert float(ego[2]) == pytest.approx(-0.96)
        assert float(ego[8]) == pytest.approx(-0.88)
        assert lines[1].endswith(",0.0,0.0")

    def test_run_stops_at_target_size_and_transposes(self, temp_dir, saver_config, scenario_events):
        saver_config.size = 2
        collector = DataCollector(saver_config, output_dir=temp_dir)

        # 목표 도달 이후의 배치는 처리되지 않음
        extra = make_batch(make_agent(0, 1.0, 1.0))
        result = collector.run(scenario_events + [extra, extra])

        assert result.completed
        assert result.frames == 2
        assert result.rows == 4
        assert result.batches_received == 3
        assert result.batches_dropped == 1
        assert result.dataset_path == temp_dir / "pedsim_pos_21.csv"
        assert result.transposed_path == temp_dir / "pedsim_pos_21_transposed.csv"

        transposed = read_lines(result.transposed_path)
        assert len(transposed) == 10
        assert transposed[0] == "0,0,1,1"

    def test_incomplete_run_still_transposes(self, temp_dir, saver_config, scenario_events):
        """스트림이 목표 크기 전에 끝나도 transpose는 한 번 실행"""
        collector = DataCollector(saver_config, output_dir=temp_dir)
        result = collector.run(scenario_events)

        assert not result.completed
        assert result.frames == 2
        assert result.transposed_path == temp_dir / "pedsim_pos_1001_transposed.csv"
        assert read_lines(result.transposed_path)[0] == "0,0,1,1"
        with pytest.raises(DataSaverError):
            collector.finish()

    def test_incomplete_run_without_transpose(self, temp_dir, saver_config, scenario_events):
        collector = DataCollector(saver_config, output_dir=temp_dir)
        result = collector.run(scenario_events, transpose=False)
        assert result.transposed_path is None
        assert not (temp_dir / "pedsim_pos_1001_transposed.csv").exists()

    def test_no_transpose(self, temp_dir, saver_config, scenario_events):
        saver_config.size = 1
        collector = DataCollector(saver_config, output_dir=temp_dir)
        result = collector.run(scenario_events, transpose=False)
        assert result.completed
        assert result.transposed_path is None


class TestLifecycle:
    """파일 열기/닫기 및 transpose 전제 조건"""

    def test_sink_closed_after_malformed_batch(self, temp_dir, saver_config):
        collector = DataCollector(saver_config, output_dir=temp_dir)
        events = [GoalUpdate(3.0, 3.0), make_batch(make_agent(0, 1.0, 1.0)), make_batch()]

        with pytest.raises(MalformedBatchError):
            collector.collect(events)

        assert not collector.writer.is_open
        assert len(read_lines(collector.writer.filepath)) == 1

    def test_transpose_requires_closed_sink(self, temp_dir, saver_config):
        collector = DataCollector(saver_config, output_dir=temp_dir)
        collector.start()
        with pytest.raises(DataSaverError):
            collector.finish()
        collector.writer.close()

    def test_transpose_runs_once(self, temp_dir, saver_config, scenario_events):
        collector = DataCollector(saver_config, output_dir=temp_dir)
        collector.collect(scenario_events)
        collector.finish()
        with pytest.raises(DataSaverError):
            collector.finish()

    def test_transpose_error_surfaces(self, temp_dir, saver_config, scenario_events):
        collector = DataCollector(saver_config, output_dir=temp_dir)
        collector.collect(scenario_events)
        with open(collector.writer.filepath, "a", encoding="utf-8") as f:
            f.write("9,9,9\n")

        with pytest.raises(TransposeError):
            collector.finish()
        # frame-major 파일은 그대로
        assert len(read_lines(collector.writer.filepath)) == 5

    def test_invalid_config_rejected_at_startup(self, temp_dir):
        with pytest.raises(ConfigurationError):
            DataCollector(DataSaverConfig(global_width=0.0), output_dir=temp_dir)

    def test_realtime_pacing(self, temp_dir, saver_config, scenario_events, monkeypatch):
        sleeps = []
        monkeypatch.setattr("collection.collector.time.sleep", sleeps.append)
        saver_config.rate = 2.0
        collector = DataCollector(saver_config, output_dir=temp_dir)

        collector.collect(scenario_events, realtime=True)

        assert len(sleeps) == len(scenario_events)
        assert all(0 < s <= 0.5 for s in sleeps)
