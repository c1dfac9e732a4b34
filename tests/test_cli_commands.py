import json

import pytest

from skyclock.cli.main import main

AT = "2020-06-25T12:00:00Z"


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(
        "[site]\nlatitude_deg = 35.0\nlongitude_deg = 139.0\n\n"
        "[clock]\ndut1_s = 0.0\n\n"
        '[catalog]\nbackend = "memory"\n',
        encoding="utf-8",
    )
    return path


def run_json(capsys, argv):
    code = main(argv)
    out = capsys.readouterr().out
    return code, json.loads(out)


def test_version(capsys):
    assert main(["--version"]) == 0
    assert "SkyClock" in capsys.readouterr().out


def test_now_json(capsys, config_path):
    code, payload = run_json(capsys, ["now", "--config", str(config_path), "--at", AT, "--json"])
    assert code == 0
    assert payload["ok"] is True
    assert payload["command"] == "now"
    data = payload["data"]
    assert data["latitude_deg"] == 35.0
    assert data["solar_angle_deg"] == pytest.approx(139.0)
    assert data["sidereal_angle_deg"] == pytest.approx(233.0886, abs=1e-3)
    assert data["utc"] == "2020-06-25T12:00:00"
    assert set(data["sun"]) == {"x", "y", "ecliptic_longitude_deg"}


def test_now_text_output(capsys, config_path):
    assert main(["now", "--config", str(config_path), "--at", AT]) == 0
    out = capsys.readouterr().out
    assert "Sidereal angle: 233.09°" in out
    assert "Solar angle: 139.00°" in out


def test_command_line_location_overrides_config(capsys, config_path):
    code, payload = run_json(
        capsys,
        ["now", "--config", str(config_path), "--at", AT, "--lat", "-33.9", "--lon", "151.2",
         "--hemisphere", "south", "--json"],
    )
    assert code == 0
    assert payload["data"]["latitude_deg"] == -33.9
    assert payload["data"]["hemisphere"] == "south"


def test_utc_offset_sets_local_time(capsys, config_path):
    code, payload = run_json(
        capsys,
        ["now", "--config", str(config_path), "--at", AT, "--utc-offset", "9", "--json"],
    )
    assert code == 0
    assert payload["data"]["local_time"] == "2020-06-25T21:00:00+09:00"


def test_invalid_latitude_exit_code(capsys, config_path):
    code, payload = run_json(
        capsys, ["now", "--config", str(config_path), "--lat", "95", "--json"]
    )
    assert code == 2
    assert payload["ok"] is False
    assert payload["error"]["code"] == "invalid_argument"


def test_missing_location_exit_code(capsys, tmp_path):
    path = tmp_path / "empty.toml"
    path.write_text("", encoding="utf-8")
    assert main(["now", "--config", str(path)]) == 2
    assert "location is required" in capsys.readouterr().err


def test_missing_config_file_exit_code(capsys, tmp_path):
    assert main(["now", "--config", str(tmp_path / "nope.toml"), "--lat", "0", "--lon", "0"]) == 1
    assert "Config file not found" in capsys.readouterr().err


def test_drag_fixed_date_json(capsys, config_path):
    code, payload = run_json(
        capsys,
        ["drag", "fixed-date", "--rotate", "90", "--config", str(config_path), "--at", AT, "--json"],
    )
    assert code == 0
    data = payload["data"]
    assert payload["command"] == "drag.fixed-date"
    assert data["day_of_year_changed"] is False
    assert data["before"]["utc"] == "2020-06-25T12:00:00"
    assert data["after"]["utc"] == "2020-06-25T06:00:00"


def test_drag_fixed_solar_keeps_solar_angle(capsys, config_path):
    code, payload = run_json(
        capsys,
        ["drag", "fixed-solar", "--rotate", "-45", "--config", str(config_path), "--at", AT, "--json"],
    )
    assert code == 0
    data = payload["data"]
    assert data["after"]["solar_angle_deg"] == pytest.approx(data["before"]["solar_angle_deg"])
    assert data["day_of_year_changed"] is True


def test_horizon_json(capsys, config_path):
    code, payload = run_json(capsys, ["horizon", "--config", str(config_path), "--at", AT, "--json"])
    assert code == 0
    data = payload["data"]
    assert len(data["horizon"]) == 722
    assert len(data["alt_azimuth_grid"]) == 12
    assert [label["text"] for label in data["direction_labels"]] == ["N", "E", "S", "W"]


def test_analemma_text(capsys, config_path):
    assert main(["analemma", "--config", str(config_path), "--at", AT]) == 0
    out = capsys.readouterr().out
    assert "day 360" in out
    assert "Month ticks" in out


def test_doctor_json(capsys, tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(
        "[site]\nlatitude_deg = 35.0\nlongitude_deg = 139.0\n\n"
        f'[catalog]\ndata_dir = "{tmp_path.as_posix()}"\n',
        encoding="utf-8",
    )
    code, payload = run_json(capsys, ["doctor", "--config", str(path), "--json"])
    assert code == 1
    checks = payload["data"]["checks"]
    assert checks["config"]["ok"] is True
    assert checks["site"]["ok"] is True
    assert checks["catalog (local)"]["ok"] is False


def test_doctor_ok_with_memory_catalog(capsys, config_path):
    assert main(["doctor", "--config", str(config_path)]) == 0
    assert "System ready." in capsys.readouterr().out


def test_render_writes_image(capsys, config_path, tmp_path):
    pytest.importorskip("matplotlib")
    out = tmp_path / "dial.png"
    assert main(["render", "--config", str(config_path), "--at", AT, "--out", str(out)]) == 0
    assert out.exists()
    assert out.stat().st_size > 0


def test_drag_reports_daylight_saving_offset(capsys, config_path, new_york):
    code, payload = run_json(
        capsys,
        ["drag", "fixed-solar", "--rotate", "-180", "--config", str(config_path),
         "--at", "2021-01-10T17:00:00Z", "--timezone", "America/New_York", "--json"],
    )
    assert code == 0
    data = payload["data"]
    assert data["before"]["local_time"] == "2021-01-10T12:00:00-05:00"
    assert data["after"]["local_time"] == "2021-07-02T13:00:00-04:00"


def test_unknown_timezone_exit_code(capsys, config_path):
    assert main(["now", "--config", str(config_path), "--timezone", "Mars/Olympus_Mons"]) == 2
    assert "Unknown time zone" in capsys.readouterr().err
