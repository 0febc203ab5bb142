"""
collect_dataset CLI 테스트
"""

import pytest

import collect_dataset


def write_recording(path, events):
    path.write_text("\n".join(e.to_jsonl() for e in events) + "\n", encoding="utf-8")
    return path


def test_cli_collects_and_transposes(temp_dir, scenario_events, capsys):
    recording = write_recording(temp_dir / "run.jsonl", scenario_events)

    code = collect_dataset.main([
        "--input", str(recording),
        "--output-dir", str(temp_dir),
        "--size", "2",
        "--flip", "2",
    ])

    assert code == 0
    dataset = temp_dir / "pedsim_pos_22.csv"
    assert len(dataset.read_text(encoding="utf-8").splitlines()) == 4
    assert (temp_dir / "pedsim_pos_22_transposed.csv").exists()
    assert "수집 완료" in capsys.readouterr().out


def test_cli_yaml_config(temp_dir, scenario_events):
    recording = write_recording(temp_dir / "run.jsonl", scenario_events)
    config_file = temp_dir / "saver.yaml"
    config_file.write_text("data_saver:\n  path: yaml_run\n  size: 2\n  flip: 4\n", encoding="utf-8")

    code = collect_dataset.main([
        "--input", str(recording),
        "--config", str(config_file),
        "--output-dir", str(temp_dir),
    ])

    assert code == 0
    assert (temp_dir / "yaml_run_24.csv").exists()


def test_cli_malformed_recording_fails(temp_dir):
    recording = temp_dir / "bad.jsonl"
    recording.write_text('{"type": "tracks", "tracks": []}\n', encoding="utf-8")

    code = collect_dataset.main(["--input", str(recording), "--output-dir", str(temp_dir)])

    assert code == 1


def test_cli_transpose_only(temp_dir):
    source = temp_dir / "data.csv"
    source.write_text("0,1,0.1,0.2,0,0,0,1,0.5,0.5\n", encoding="utf-8")

    assert collect_dataset.main(["--transpose", str(source)]) == 0
    assert (temp_dir / "data_transposed.csv").exists()


def test_cli_transpose_only_broken_file(temp_dir):
    source = temp_dir / "data.csv"
    source.write_text("0,1,0.1\n", encoding="utf-8")
    assert collect_dataset.main(["--transpose", str(source)]) == 1


def test_cli_without_input_prints_help(capsys):
    assert collect_dataset.main([]) == 1
    assert "usage" in capsys.readouterr().out


def test_cli_transpose_only_nan_index_fails(temp_dir):
    source = temp_dir / "nan_ids.csv"
    source.write_text("nan,1,0.1,0.2,0,0,0,1,0.5,0.5\n", encoding="utf-8")
    assert collect_dataset.main(["--transpose", str(source)]) == 1
    assert not (temp_dir / "nan_ids_transposed.csv").exists()


@pytest.mark.parametrize("content", ["data_saver:\n  size: big\n", "data_saver:\n  flip: 2.7\n"])
def test_cli_invalid_yaml_config_fails(temp_dir, scenario_events, content):
    recording = write_recording(temp_dir / "run.jsonl", scenario_events)
    config_file = temp_dir / "saver.yaml"
    config_file.write_text(content, encoding="utf-8")

    code = collect_dataset.main([
        "--input", str(recording),
        "--config", str(config_file),
        "--output-dir", str(temp_dir),
    ])

    assert code == 1
    assert not list(temp_dir.glob("*.csv"))
