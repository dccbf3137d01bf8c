import json

from cosmon import doctor
from cosmon.config import Config
from cosmon.constants import NETWORK_LEVEL_CONNECTED, VERSION


class FakePins:
    def __init__(self):
        self.network_writes = []

    def read_cos(self):
        return True

    def shutdown_pressed(self):
        return False

    def write_network(self, level):
        self.network_writes.append(level)


class FixedProbe:
    def current_address(self):
        return "10.1.2.3"


def test_print_config(tmp_path, capsys):
    p = tmp_path / "cosmon.toml"
    p.write_text("[gpio]\ngpio_COS = 26\n")
    assert doctor.main(["--config", str(p), "--print-config"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["gpio"]["gpio_COS"] == 26
    assert data["COS settings"]["COS_poll_loop_interval_ms"] == 100


def test_print_config_warns_on_invalid_values(tmp_path, capsys):
    p = tmp_path / "cosmon.toml"
    p.write_text('[gpio]\ngpio_COS = "x"\n')
    assert doctor.main(["--config", str(p), "--print-config"]) == 0
    out = capsys.readouterr().out
    assert "WARNING: [gpio] gpio_COS='x' is invalid; using 21" in out


def test_version(capsys):
    assert doctor.main(["--version"]) == 0
    assert capsys.readouterr().out.strip() == VERSION


def test_run_doctor_reports_levels_without_commands(tmp_path, monkeypatch):
    monkeypatch.setattr(doctor.time, "sleep", lambda s: None)
    clock = {"t": 0.0}

    def fake_monotonic():
        clock["t"] += 0.1
        return clock["t"]

    monkeypatch.setattr(doctor.time, "monotonic", fake_monotonic)

    lines = []
    pins = FakePins()
    cfg = Config(control_file=str(tmp_path / "missing.ctl"))
    doctor.run_doctor(cfg, seconds=1.0, pins=pins, probe=FixedProbe(), out=lines.append)

    text = "\n".join(lines)
    assert "WARN: control file missing" in text
    assert "COS timeout: 150000 ms = 1500 ticks of 100 ms" in text
    assert f"COS gpio={cfg.cos_pin} level=1 active=True" in text
    assert "SHUTDOWN gpio=4 pressed=False" in text
    assert "NETWORK address=10.1.2.3 connected=True" in text
    # Levels are printed once per change, not every poll.
    assert text.count("COS gpio=") == 1
    assert pins.network_writes == [NETWORK_LEVEL_CONNECTED]
