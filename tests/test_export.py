import csv
from io import StringIO

from fplboard.models import Player
from fplboard.table import FilterCriteria, SortState, derive_rows, export_rows_to_csv


def test_export_writes_display_values_and_blank_unknowns():
    players = [
        Player(id=1, first_name="Jordan", second_name="Pickford", team=7, element_type=1, total_points=140, now_cost=50),
        Player(id=2, first_name="Unknown", second_name="Keeper", team=99, element_type=1, total_points=None, now_cost=40),
    ]
    rows = derive_rows(players, {7: "Everton"}, FilterCriteria(), SortState("now_cost", "asc"))

    lines = list(csv.reader(StringIO(export_rows_to_csv(rows))))

    assert lines[0][:6] == ["id", "name", "team", "position", "Points", "Cost (£)"]
    assert lines[1][:6] == ["2", "Unknown Keeper", "", "Goalkeeper", "", "4"]
    assert lines[2][:6] == ["1", "Jordan Pickford", "Everton", "Goalkeeper", "140", "5"]
