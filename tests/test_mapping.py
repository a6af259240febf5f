import numpy as np
import pandas as pd

from gamesearch.mapping import clamp_complexity, rows_to_candidates, to_candidate, to_game_details


def test_to_game_details_coerces_strings():
    details = to_game_details(
        {
            "id": " 13 ",
            "name": "Catan",
            "complexity": "2.30",
            "min_playing_time": "60",
            "max_playing_time": "120",
            "min_players": "3",
            "max_players": "4",
            "description": "  ",
            "thumbnail": None,
        }
    )
    assert details.id == "13"
    assert details.complexity == 2.3
    assert (details.min_playing_time, details.max_playing_time) == (60, 120)
    assert (details.min_players, details.max_players) == (3, 4)
    assert details.description is None
    assert details.thumbnail is None


def test_to_game_details_defaults_for_missing_values():
    row = pd.Series({"id": "9", "name": "Mystery", "complexity": np.nan, "min_playing_time": None})
    details = to_game_details(row)
    assert details.complexity == 0.0
    assert details.min_playing_time == 0
    assert details.max_playing_time == 0
    assert details.min_players == 1
    assert details.max_players == 4


def test_to_game_details_numpy_scalars_and_junk():
    details = to_game_details(
        {
            "id": "1",
            "name": "Numbers",
            "complexity": np.float64(-1.0),
            "min_playing_time": np.int64(30),
            "max_playing_time": "n/a",
            "min_players": np.int64(2),
            "max_players": "lots",
        }
    )
    assert details.complexity == 0.0
    assert details.min_playing_time == 30
    # unparsable max falls back to the min
    assert details.max_playing_time == 30
    assert details.min_players == 2
    assert details.max_players == 4


def test_clamp_complexity():
    assert clamp_complexity(-0.5) == 0.0
    assert clamp_complexity(2.5) == 2.5
    assert clamp_complexity(9.0) == 5.0


def test_to_candidate_and_rows():
    assert to_candidate({"id": 7, "name": " 7 Wonders ", "year": "2010"}).model_dump() == {
        "id": "7",
        "name": "7 Wonders",
        "year": "2010",
    }
    df = pd.DataFrame({"id": ["1", "2"], "name": ["Catan", "Dominion"]})
    cands = rows_to_candidates(df)
    assert [c.name for c in cands] == ["Catan", "Dominion"]
    assert all(c.year is None for c in cands)


def test_non_finite_numbers_fall_back_to_defaults():
    details = to_game_details(
        {
            "id": "5",
            "name": "Broken Stats",
            "complexity": "nan",
            "min_playing_time": "1e400",
            "max_playing_time": float("inf"),
            "min_players": "-inf",
            "max_players": np.float64("nan"),
        }
    )
    assert details.complexity == 0.0
    assert details.min_playing_time == 0
    assert details.max_playing_time == 0
    assert details.min_players == 1
    assert details.max_players == 4
