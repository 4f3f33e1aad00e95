import json
from pathlib import Path

import pytest

from teambalance.cli import main


def _write_players(path: Path, count: int = 8) -> Path:
    lines = [
        "player_id,historical_event_engagements,days_active_last_30,current_total_points,"
        "current_streak_value,current_team_id,current_team_name"
    ]
    for i in range(1, count + 1):
        lines.append(f"{i},{i * 3 % 11},{i * 5 % 31},{i * 40},{i % 4},{i % 2 + 1},Team {i % 2 + 1}")
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def test_cli_prints_summary(tmp_path: Path, capsys):
    players = _write_players(tmp_path / "players.csv")

    main([str(players), "--teams", "2", "--seed", "42", "--stats"])

    out = capsys.readouterr().out
    assert "TEAM REASSIGNMENT RESULTS" in out
    assert "Assignment changes:" in out
    assert "Statistics:" in out
    assert "Team 1: median" in out
    assert "top player" in out


def test_cli_writes_csv(tmp_path: Path):
    players = _write_players(tmp_path / "players.csv")
    output = tmp_path / "out.csv"

    main([str(players), "-t", "2", "-s", "7", "--csv", "-o", str(output)])

    lines = output.read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("player_id,new_team_id")
    assert len(lines) == 9


def test_cli_output_is_reproducible(tmp_path: Path, capsys):
    players = _write_players(tmp_path / "players.csv", count=12)

    main([str(players), "-t", "3", "-s", "5", "--simple"])
    first = capsys.readouterr().out
    main([str(players), "-t", "3", "-s", "5", "--simple"])
    second = capsys.readouterr().out

    assert first == second
    assert len(first.splitlines()) == 12


def test_cli_rejects_too_many_teams(tmp_path: Path, capsys):
    players = _write_players(tmp_path / "players.csv", count=3)

    with pytest.raises(SystemExit) as excinfo:
        main([str(players), "-t", "2"])

    assert excinfo.value.code == 1
    assert "Need at least 4 players" in capsys.readouterr().err


def test_cli_reports_invalid_rows(tmp_path: Path, capsys):
    path = tmp_path / "players.csv"
    path.write_text("player_id,current_total_points\n1,5\nnope,3\n2,1\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main([str(path), "-t", "2"])

    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert "line 3" in err
    assert "nope" in err


def test_cli_rejects_out_of_range_seed(tmp_path: Path, capsys):
    players = _write_players(tmp_path / "players.csv")

    with pytest.raises(SystemExit) as excinfo:
        main([str(players), "-t", "2", "-s", "-1"])

    assert excinfo.value.code == 1
    assert "non-negative" in capsys.readouterr().err


def test_cli_profile_round_trip(tmp_path: Path, capsys):
    players = _write_players(tmp_path / "players.csv")
    profile = tmp_path / "profile.json"

    main([str(players), "-t", "2", "--save-profile", str(profile), "--robust", "--simple"])
    saved = json.loads(profile.read_text(encoding="utf-8"))
    assert saved["base_weights"]["engagement"] == pytest.approx(0.4)
    assert saved["robust"] is True
    captured = capsys.readouterr()
    first = captured.out.splitlines()
    assert captured.err.startswith("Saved weights profile")

    main([str(players), "-t", "2", "--load-profile", str(profile), "--simple"])
    second = capsys.readouterr().out.splitlines()
    assert second == first


def test_cli_rejects_bad_profile(tmp_path: Path, capsys):
    players = _write_players(tmp_path / "players.csv")
    profile = tmp_path / "profile.json"
    profile.write_text(json.dumps({"base_weights": {"speed": 1.0}}), encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main([str(players), "-t", "2", "--load-profile", str(profile)])

    assert excinfo.value.code == 1
    assert "invalid profile" in capsys.readouterr().err


def test_cli_csv_output_stays_clean_when_saving_profile(tmp_path: Path, capsys):
    players = _write_players(tmp_path / "players.csv")
    profile = tmp_path / "weights.json"

    main([str(players), "-t", "2", "--csv", "--save-profile", str(profile)])

    captured = capsys.readouterr()
    assert captured.out.startswith("player_id,")
    assert len(captured.out.splitlines()) == 9
    assert f"Saved weights profile to {profile}" in captured.err
    assert profile.exists()


def test_cli_reports_non_utf8_file(tmp_path: Path, capsys):
    path = tmp_path / "players.csv"
    path.write_bytes(b"player_id,current_team_name\n1,Red\n2,\xff\xfe\n3,Blue\n4,Red\n")

    with pytest.raises(SystemExit) as excinfo:
        main([str(path), "-t", "2"])

    assert excinfo.value.code == 1
    assert "not valid UTF-8" in capsys.readouterr().err
