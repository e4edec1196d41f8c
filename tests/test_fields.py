import pytest

from fplboard.config import (
    CHART_METRICS,
    HISTORY_COLUMNS,
    STAT_FIELDS,
    get_chart_metric,
    get_stat_field,
    position_name,
)


def test_cost_fields_are_stored_in_tenths():
    assert get_stat_field("now_cost").apply(55) == pytest.approx(5.5)
    assert get_chart_metric("value").apply(100) == pytest.approx(10.0)
    assert get_stat_field("now_cost").apply(None) is None


def test_plain_fields_pass_values_through():
    assert get_stat_field("minutes").apply(90) == 90
    assert get_stat_field("minutes").transform is None


def test_table_and_chart_sets_overlap_but_differ():
    stat_keys = {stat.key for stat in STAT_FIELDS}
    chart_keys = {metric.key for metric in CHART_METRICS}
    assert {"total_points", "goals_scored", "assists"} <= stat_keys & chart_keys
    assert "now_cost" not in chart_keys
    assert "value" not in stat_keys


def test_lookup_missing_raises():
    with pytest.raises(KeyError):
        get_stat_field("value")
    with pytest.raises(KeyError):
        get_chart_metric("now_cost")


def test_position_names():
    assert position_name(1) == "Goalkeeper"
    assert position_name(4) == "Forward"
    assert position_name(5) == "Unknown"
    assert position_name(None) == "Unknown"


def test_history_selected_column_counts_managers():
    labels = {column.key: column.label for column in HISTORY_COLUMNS}
    assert labels["selected"] == "Selected By (managers)"
