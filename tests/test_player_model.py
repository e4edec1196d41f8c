import pytest
from pydantic import ValidationError

from fplboard.models import BootstrapData, ElementSummary, GameweekEntry, Player

from tests.fakes import bootstrap_payload


def test_player_is_frozen_and_coerces_decimal_strings():
    player = Player.model_validate(
        {"id": 1, "first_name": "Cole", "second_name": "Palmer", "form": "8.0", "points_per_game": "6.1", "status": "a"}
    )

    assert player.form == pytest.approx(8.0)
    assert player.points_per_game == pytest.approx(6.1)
    assert player.chance_of_playing_next_round is None
    assert player.full_name == "Cole Palmer"

    with pytest.raises((TypeError, ValidationError)):
        player.form = 1.0  # type: ignore[misc]


def test_bootstrap_ignores_unrelated_upstream_fields():
    bootstrap = BootstrapData.model_validate(bootstrap_payload())

    assert len(bootstrap.elements) == 3
    assert bootstrap.team_names() == {7: "Everton", 12: "Liverpool", 13: "Man City"}


def test_gameweek_entry_coerces_expected_stats():
    entry = GameweekEntry.model_validate({"round": 3, "expected_goals": "0.45", "creativity": "12.3", "value": 55})
    assert entry.expected_goals == pytest.approx(0.45)
    assert entry.creativity == pytest.approx(12.3)
    assert entry.threat is None


def test_element_summary_requires_history():
    with pytest.raises(ValidationError):
        ElementSummary.model_validate({"detail": "Not found."})
    assert ElementSummary.model_validate({"history": []}).history == []
