import json
import pytest
from docverify.config import settings
from docverify.scripts.check import main, parse_args

def test_parse_args_maps_wire_names():
    claim = parse_args(["EMP001", "--fullName", "Jane Doe", "--phone", "555-0101"])
    assert claim.employee_id == "EMP001"
    assert claim.full_name == "Jane Doe"
    assert claim.phone == "555-0101"
    assert claim.email is None

@pytest.mark.parametrize("argv", [[], ["EMP001", "--nickname", "JD"], ["EMP001", "--email"]])
def test_usage_errors_exit_2(argv, capsys):
    with pytest.raises(SystemExit) as ei:
        main(argv)
    assert ei.value.code == 2
    assert "usage" in capsys.readouterr().err

def test_blank_id_exits_2(seeded, capsys):
    assert main(["  "]) == 2
    assert "Employee ID is required" in capsys.readouterr().err

def test_check_against_db(seeded, capsys):
    assert main(["EMP001", "--email", "jane.doe@tripgo.example"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["verified"] is True and out["match_percentage"] == 100
    assert "record" not in out

    assert main(["EMP002"]) == 1
    out = json.loads(capsys.readouterr().out)
    assert out["status"] == "TERMINATED"

def test_check_uses_configured_threshold(seeded, monkeypatch, capsys):
    argv = ["EMP001", "--firstName", "Jane", "--lastName", "Doe",
            "--email", "jane.doe@tripgo.example", "--phone", "000"]
    assert main(argv) == 0  # 4 of 5 = 80%
    capsys.readouterr()
    monkeypatch.setattr(settings, "verify_threshold", 100)
    assert main(argv) == 1
    out = json.loads(capsys.readouterr().out)
    assert out["match_percentage"] == 80 and out["verified"] is False
