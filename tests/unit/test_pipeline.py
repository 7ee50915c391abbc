import logging
from pathlib import Path

import pandas as pd
import pytest

from uas_map.core import InputError, SchemaError, ValidationError
from uas_map.data import pipeline as pipeline_module
from uas_map.data import (
    LABEL_SEPARATOR,
    build_gazetteer,
    load_table,
    run_pipeline,
    selectable_attributes,
)


def _write_csv(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_run_pipeline_from_dataframe():
    df = pd.DataFrame(
        [
            {"city": "Tirana", "population": "500000"},
            {"city": "XYZ", "population": "10"},
        ]
    )

    result = run_pipeline(df, ["population"])

    assert len(result.markers) == 1
    marker = result.markers[0]
    assert (marker.latitude, marker.longitude) == (41.3275, 19.8189)
    assert "Tirana" in marker.label
    assert "population: 500000" in marker.label
    assert result.rows_in == 2
    assert result.rows_matched == 1
    assert result.unmatched_count == 1
    assert result.unmatched_cities == ["xyz"]
    assert result.summary()["markers"] == 1


def test_run_pipeline_reads_utf8_csv(tmp_path):
    path = _write_csv(
        tmp_path / "upload.csv",
        "city,population,unemployment\nDurrës,175000,9.5\nShkodёr,135000,\nGotham,1,1\n",
    )

    result = run_pipeline(path, ["unemployment", "population"])

    assert [m.city for m in result.markers] == ["Durrës", "Shkodër"]
    assert result.markers[0].label.split(LABEL_SEPARATOR) == [
        "City: Durrës",
        "unemployment: 9.5",
        "population: 175000",
    ]
    assert "unemployment: (missing)" in result.markers[1].label


def test_run_pipeline_reads_semicolon_csv_with_bom(tmp_path):
    path = tmp_path / "upload.csv"
    path.write_bytes("\ufeffcity;score\nBerat;4\nFier;5\n".encode("utf-8"))
    result = run_pipeline(path, ["score"])
    assert [m.city for m in result.markers] == ["Berat", "Fier"]


def test_run_pipeline_without_city_column_fails_with_schema_error():
    df = pd.DataFrame([{"town": "Tirana", "population": 1}])
    with pytest.raises(SchemaError):
        run_pipeline(df, ["population"])


def test_run_pipeline_with_no_attributes_fails_with_validation_error():
    df = pd.DataFrame([{"city": "Tirana", "population": 1}])
    with pytest.raises(ValidationError):
        run_pipeline(df, [])


def test_run_pipeline_rejects_reserved_columns():
    df = pd.DataFrame([{"city": "Tirana", "population": 1}])
    with pytest.raises(ValidationError, match="reserved"):
        run_pipeline(df, ["population", "city"])


def test_run_pipeline_unknown_attribute_renders_placeholder():
    df = pd.DataFrame([{"city": "Tirana", "population": 1}])
    result = run_pipeline(df, ["gdp"])
    assert result.markers[0].label.endswith("gdp: (missing)")


def test_run_pipeline_does_not_modify_input_frame():
    df = pd.DataFrame([{"city": "KAMËZ", "n": 1}])
    run_pipeline(df, ["n"])
    assert df.to_dict(orient="records") == [{"city": "KAMËZ", "n": 1}]


def test_run_pipeline_with_custom_gazetteer():
    gaz = build_gazetteer([("Prishtinë", 42.6629, 21.1655)])
    df = pd.DataFrame([{"city": "Prishtina", "n": 1}, {"city": "prishtine", "n": 2}])
    result = run_pipeline(df, ["n"], gazetteer=gaz)
    assert [m.label.split(LABEL_SEPARATOR)[1] for m in result.markers] == ["n: 2"]


def test_load_table_requires_city_column(tmp_path):
    path = _write_csv(tmp_path / "upload.csv", "City,population\nTirana,1\n")
    with pytest.raises(SchemaError):
        load_table(path)


def test_selectable_attributes_excludes_reserved_columns():
    columns = ["city", "population", "lat", "lon", "gdp"]
    assert selectable_attributes(columns) == ["population", "gdp"]


def test_run_pipeline_with_non_string_column_labels():
    df = pd.DataFrame([{"city": "Tirana", 2020: 5}])
    attributes = selectable_attributes(df.columns)
    assert attributes == ["2020"]

    result = run_pipeline(df, attributes)

    assert result.markers[0].label == "City: Tirana\n2020: 5"


def test_run_pipeline_accepts_index_of_attribute_names():
    df = pd.DataFrame([{"city": "Tirana", "population": 500000, "area": 41.8}])
    result = run_pipeline(df, df.columns[1:])
    assert result.attributes == ["population", "area"]
    assert result.markers[0].label.split(LABEL_SEPARATOR)[1:] == ["population: 500000", "area: 41.8"]


def test_run_pipeline_missing_file_is_an_input_error(tmp_path):
    with pytest.raises(InputError, match="Cannot open"):
        run_pipeline(tmp_path / "nope.csv", ["population"])
    assert not issubclass(InputError, SchemaError)


def test_run_pipeline_skips_city_dump_when_debug_is_off(monkeypatch):
    def fail(_values):
        raise AssertionError("normalize_cities called without DEBUG logging")

    monkeypatch.setattr(pipeline_module, "normalize_cities", fail)
    previous = pipeline_module.logger.level
    pipeline_module.logger.setLevel(logging.INFO)
    try:
        result = run_pipeline(pd.DataFrame([{"city": "Fier", "n": 1}]), ["n"])
    finally:
        pipeline_module.logger.setLevel(previous)
    assert len(result.markers) == 1
