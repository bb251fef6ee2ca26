import pytest

from rosters.pipeline.groups import build_group_map, match_group
from rosters.utils.names import normalize_group_name


def test_normalize_group_name():
    assert normalize_group_name("Varsity (JV)") == "varsity"
    assert normalize_group_name("  Team   A  ") == "team a"
    assert normalize_group_name("Centerville (Open) (Winds)") == "centerville"
    assert normalize_group_name("North(JV)Winds") == "north winds"
    assert normalize_group_name("") == ""
    assert normalize_group_name(None) == ""


def test_normalize_group_name_matches_case_and_spacing():
    assert normalize_group_name("Varsity (JV)") == normalize_group_name("varsity")
    assert normalize_group_name("TEAM\tA") == normalize_group_name("team a")


@pytest.mark.parametrize("raw", [
    "Varsity (JV)",
    "((nested) name)",
    "Unclosed (paren",
    "Trailing )",
    "  Mixed\nWhitespace  (A) B ",
])
def test_normalize_group_name_is_idempotent(raw):
    once = normalize_group_name(raw)
    assert normalize_group_name(once) == once


def test_build_group_map_last_write_wins():
    groups = [
        {"id": "g1", "name": "Team A"},
        {"id": "g2", "name": "Team B (Open)"},
        {"id": "g3", "name": "team  a"},
        {"id": "g4", "name": ""},
        {"id": "g5"},
    ]
    group_map = build_group_map(groups)
    assert group_map == {"team a": "g3", "team b": "g2"}


def test_match_group_is_exact_on_normalized_name():
    group_map = {"team a": "g1"}
    assert match_group("TEAM A", group_map) == "g1"
    assert match_group("Team A (Open)", group_map) == "g1"
    assert match_group("Team", group_map) is None
    assert match_group("Team AB", group_map) is None
