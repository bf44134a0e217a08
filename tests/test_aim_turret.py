"""
Tests for the aim_turret command-line script.
"""

import importlib.util
import json
from pathlib import Path

import pytest

SCRIPT_PATH = Path(__file__).parent.parent / "scripts" / "aim_turret.py"


@pytest.fixture(scope="module")
def aim_turret():
    """Import scripts/aim_turret.py as a module."""
    spec = importlib.util.spec_from_file_location("aim_turret", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestAimTurretScript:
    """Tests for aim_turret.main()."""

    def test_list(self, aim_turret, capsys):
        assert aim_turret.main(["--list"]) == 0
        out = capsys.readouterr().out
        assert "tank_cannon" in out
        assert "naval_gun" in out

    def test_json_output(self, aim_turret, capsys):
        code = aim_turret.main(["--turret", "coaxial_gun", "--target", "0", "100", "0", "--json"])
        assert code == 0

        result = json.loads(capsys.readouterr().out)
        assert result["turret"] == "coaxial_gun"
        assert result["target"] == [0.0, 100.0, 0.0]
        assert result["yaw"] == pytest.approx(90.0)
        assert result["pitch"] == pytest.approx(0.0, abs=1e-5)
        assert result["roll"] == 0.0

    def test_text_output(self, aim_turret, capsys):
        assert aim_turret.main(["--turret", "tank_cannon", "--target", "2000", "500", "150"]) == 0
        out = capsys.readouterr().out
        assert "Turret: tank_cannon" in out
        assert "Pitch:" in out
        assert "Yaw:" in out

    def test_actor_overrides(self, aim_turret, capsys):
        code = aim_turret.main([
            "--turret", "coaxial_gun",
            "--target", "0", "100", "0",
            "--actor-rotation", "0", "90", "0",
            "--actor-location", "0", "0", "0",
            "--actor-scale", "2",
            "--json",
        ])
        assert code == 0
        result = json.loads(capsys.readouterr().out)
        # Target sits straight along the turned actor's forward axis
        assert result["yaw"] == pytest.approx(0.0, abs=1e-9)

    def test_unknown_turret(self, aim_turret, capsys):
        assert aim_turret.main(["--turret", "railgun", "--target", "1", "2", "3"]) == 1
        assert "Unknown turret" in capsys.readouterr().err

    def test_missing_config(self, aim_turret, tmp_path, capsys):
        missing = str(tmp_path / "nope.json")
        assert aim_turret.main(["--config", missing, "--list"]) == 1
        assert "not found" in capsys.readouterr().err

    @pytest.mark.parametrize("config", [
        [],
        {"turrets": {"bad": {"joint_to_barrel_start": [0, None, 0],
                             "barrel_start_to_barrel_end": [100, 0, 0]}}},
        {"turrets": {"bad": {"joint_to_barrel_start": [0, 0, 0],
                             "barrel_start_to_barrel_end": [[100], 0, 0]}}},
        {"turrets": {"bad": {"joint_to_barrel_start": [0, 0, 0],
                             "barrel_start_to_barrel_end": [100, 0, 0],
                             "actor_transform": {"rotation": {"yaw": None}}}}},
    ])
    def test_malformed_config(self, aim_turret, tmp_path, capsys, config):
        config_path = tmp_path / "turrets.json"
        config_path.write_text(json.dumps(config))
        assert aim_turret.main(["--config", str(config_path), "--list"]) == 1
        assert "Error loading turret config" in capsys.readouterr().err

    def test_target_required(self, aim_turret):
        with pytest.raises(SystemExit) as exc_info:
            aim_turret.main(["--turret", "tank_cannon"])
        assert exc_info.value.code == 2

    def test_bad_scale_arity(self, aim_turret):
        with pytest.raises(SystemExit) as exc_info:
            aim_turret.main(["--turret", "tank_cannon", "--target", "1", "2", "3", "--actor-scale", "1", "2"])
        assert exc_info.value.code == 2
