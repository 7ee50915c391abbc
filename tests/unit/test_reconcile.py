import pytest

from uas_map.core import SchemaError
from uas_map.data import DEFAULT_GAZETTEER, build_gazetteer, reconcile, reconcile_rows


def test_reconcile_attaches_coordinates_and_drops_unknown_cities():
    rows = [
        {"city": "Tirana", "population": "500000"},
        {"city": "XYZ", "population": "10"},
    ]

    enriched = reconcile(rows, DEFAULT_GAZETTEER)

    assert len(enriched) == 1
    row = enriched[0]
    assert row.canonical_key == "tirana"
    assert row.display_name == "Tirana"
    assert (row.latitude, row.longitude) == (41.3275, 19.8189)
    assert row.get("population") == "500000"


def test_reconcile_matches_spelling_variants():
    enriched = reconcile([{"city": "Shkodёr"}, {"city": "DURRËS"}, {"city": " korce "}], DEFAULT_GAZETTEER)
    assert [row.canonical_key for row in enriched] == ["shkoder", "durres", "korce"]


def test_reconcile_keeps_duplicates_and_input_order():
    rows = [
        {"city": "Fier", "n": 1},
        {"city": "tirana", "n": 2},
        {"city": "Nowhere", "n": 3},
        {"city": "Tirana", "n": 4},
    ]
    enriched = reconcile(rows, DEFAULT_GAZETTEER)
    assert [row.get("n") for row in enriched] == [1, 2, 4]
    assert enriched[1].latitude == enriched[2].latitude


def test_reconcile_does_not_mutate_input_rows():
    rows = [{"city": "Berat", "value": 1}]
    enriched = reconcile(rows, DEFAULT_GAZETTEER)
    assert rows == [{"city": "Berat", "value": 1}]
    with pytest.raises(TypeError):
        enriched[0].attributes["value"] = 2  # type: ignore[index]


def test_reconcile_requires_city_column_before_matching():
    rows = [{"city": "Tirana"}, {"town": "Durrës"}]
    with pytest.raises(SchemaError):
        reconcile(rows, DEFAULT_GAZETTEER)


def test_city_column_name_is_case_sensitive():
    with pytest.raises(SchemaError):
        reconcile([{"City": "Tirana"}], DEFAULT_GAZETTEER)


def test_reconcile_rows_reports_unmatched_counts():
    rows = [{"city": "Tirana"}, {"city": "Atlantis"}, {"city": None}, {"city": "atlantis"}]
    result = reconcile_rows(rows, DEFAULT_GAZETTEER)
    assert result.rows_in == 4
    assert result.rows_matched == 1
    assert result.unmatched_count == 3
    assert result.unmatched_cities == ["(blank)", "atlantis"]


def test_reconcile_empty_input():
    result = reconcile_rows([], DEFAULT_GAZETTEER)
    assert result.rows == []
    assert result.unmatched_count == 0


def test_reconcile_filter_property_against_custom_gazetteer():
    gaz = build_gazetteer([("Alpha", 1.0, 2.0), ("Beta", 3.0, 4.0)])
    rows = [{"city": name} for name in ["alpha", "gamma", "BETA", "delta", "Älpha"]]
    enriched = reconcile(rows, gaz)
    assert len(enriched) <= len(rows)
    assert [row.canonical_key for row in enriched] == ["alpha", "beta", "alpha"]
    for row in enriched:
        entry = gaz.lookup(row.canonical_key)
        assert (row.latitude, row.longitude) == (entry.latitude, entry.longitude)
