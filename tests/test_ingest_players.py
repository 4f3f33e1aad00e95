import math
from io import StringIO
from pathlib import Path

import pytest

from teambalance import assign_teams, score_players
from teambalance.errors import DuplicatePlayerError, InvalidPlayerDataError, InvalidTeamCountError
from teambalance.ingest import (
    clean_players,
    find_duplicate_ids,
    load_players_csv,
    read_players,
    summarize_players,
    validate_players,
    validate_team_constraints,
)
from teambalance.models import PlayerRecord


HEADER = (
    "player_id,historical_events_participated,historical_event_engagements,historical_points_earned,"
    "historical_points_spent,historical_messages_sent,current_total_points,days_active_last_30,"
    "current_streak_value,last_active_ts,current_team_id,current_team_name"
)


def _csv(*rows: str) -> str:
    return "\n".join([HEADER, *rows]) + "\n"


def test_load_players_csv(tmp_path: Path):
    path = tmp_path / "players.csv"
    path.write_text(
        _csv(
            "1,10,8,500,120,33,380,21,4,2024-05-01T10:00:00Z,2,Blue",
            "2,3,1,40,0,2,40,2,0,2024-04-11T08:30:00Z,1,Red",
        ),
        encoding="utf-8",
    )

    players = load_players_csv(path)

    assert [p.player_id for p in players] == [1, 2]
    assert players[0].historical_event_engagements == pytest.approx(8.0)
    assert players[0].current_team_name == "Blue"
    assert players[1].current_team_id == 1
    assert not players[0].has_features


def test_blank_and_unparsable_numbers_read_as_zero():
    players = read_players(StringIO(_csv("5,,abc,,,,12.5,7,,,3,")))

    assert players[0].historical_event_engagements == 0.0
    assert players[0].historical_events_participated == 0.0
    assert players[0].current_total_points == pytest.approx(12.5)
    assert players[0].current_team_name == ""


def test_non_finite_numbers_read_as_zero():
    text = (
        "player_id,current_total_points,days_active_last_30,current_streak_value\n"
        "1,nan,inf,-Infinity\n"
        "2,100,5,1\n"
        "3,200,9,2\n"
        "4,300,12,NaN\n"
    )
    players = read_players(StringIO(text))

    assert players[0].current_total_points == 0.0
    assert players[0].days_active_last_30 == 0.0
    assert players[0].current_streak_value == 0.0
    assert players[3].current_streak_value == 0.0

    scored = score_players(players)
    assert all(math.isfinite(player.composite_score) for player in scored)
    result = assign_teams(scored, 2, seed=1)
    assert 0.0 < result.fairness.balance_coefficient <= 1.0


def test_non_utf8_file_is_reported_as_invalid_data(tmp_path: Path):
    path = tmp_path / "players.csv"
    path.write_bytes(b"player_id,current_team_name\n1,Red\n2,\xff\xfe\n")

    with pytest.raises(InvalidPlayerDataError, match="not valid UTF-8"):
        load_players_csv(path)


def test_secondary_feature_columns_are_collected():
    text = "player_id,current_total_points,spending_efficiency,event_variety_score,unrelated\n1,5,0.8,0.25,x\n"
    players = read_players(StringIO(text))

    assert players[0].features == {"spending_efficiency": 0.8, "event_variety_score": 0.25}


def test_invalid_player_ids_are_reported_together():
    text = _csv(
        "1,1,1,1,1,1,1,1,1,,1,A",
        "abc,1,1,1,1,1,1,1,1,,1,A",
        "0,1,1,1,1,1,1,1,1,,1,A",
        "4,1,1,1,1,1,1,1,1,,1,A",
    )
    with pytest.raises(InvalidPlayerDataError) as excinfo:
        read_players(StringIO(text))

    rows = excinfo.value.rows
    assert [row.line_number for row in rows] == [3, 4]
    assert rows[0].player_id == "abc"
    assert "positive" in rows[1].reason


def test_clean_players_clamps_values():
    players = [
        PlayerRecord(player_id=1, current_total_points=-20, days_active_last_30=45, current_streak_value=3),
        PlayerRecord(player_id=2, days_active_last_30=12),
    ]
    cleaned = clean_players(players)

    assert cleaned[0].current_total_points == 0.0
    assert cleaned[0].days_active_last_30 == 30.0
    assert cleaned[0].current_streak_value == 3.0
    assert cleaned[1] is players[1]


def test_duplicate_ids_are_rejected():
    players = [PlayerRecord(player_id=pid) for pid in (1, 2, 2, 3, 3, 3)]

    assert find_duplicate_ids(players) == [2, 3]
    with pytest.raises(DuplicatePlayerError) as excinfo:
        validate_players(players)
    assert excinfo.value.duplicates == [2, 3]

    validate_players([PlayerRecord(player_id=1), PlayerRecord(player_id=2)])


@pytest.mark.parametrize(("total", "teams"), [(10, 1), (3, 4), (5, 3)])
def test_team_constraints_rejected(total, teams):
    with pytest.raises(InvalidTeamCountError):
        validate_team_constraints(total, teams)


def test_team_constraints_accepted():
    validate_team_constraints(6, 3)
    validate_team_constraints(100, 2)


def test_summarize_players():
    players = [
        PlayerRecord(player_id=1, historical_event_engagements=2, days_active_last_30=10, current_team_id=2),
        PlayerRecord(player_id=2, historical_event_engagements=6, days_active_last_30=20, current_team_id=1),
        PlayerRecord(player_id=3, historical_event_engagements=4, current_team_id=2, features={"spending_frequency": 1}),
    ]
    summary = summarize_players(players)

    assert summary.total_players == 3
    assert summary.engagement_range.min == 2
    assert summary.engagement_range.max == 6
    assert summary.engagement_range.avg == pytest.approx(4.0)
    assert summary.activity_range.avg == pytest.approx(10.0)
    assert summary.current_teams == (1, 2)
    assert summary.players_with_features == 1

    with pytest.raises(ValueError):
        summarize_players([])
