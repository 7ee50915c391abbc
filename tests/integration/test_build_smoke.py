from pathlib import Path

from uas_map.build import EXIT_FAILURE, EXIT_SUCCESS, main


def _upload(tmp_path: Path) -> Path:
    path = tmp_path / "albania.csv"
    path.write_text(
        "city,population,unemployment\n"
        "Tirana,500000,11.2\n"
        "Durres,175000,9.5\n"
        "Korçë,75000,\n"
        "XYZ,10,1\n",
        encoding="utf-8",
    )
    return path


def test_build_writes_html_map(tmp_path):
    out = tmp_path / "html" / "index.html"
    code = main(["--data", str(_upload(tmp_path)), "-a", "population", "-a", "unemployment", "--out", str(out)])

    assert code == EXIT_SUCCESS
    html = out.read_text(encoding="utf-8")
    assert "Tirana" in html
    assert "population:" in html
    assert "Markers:</strong> 3" in html
    assert "Not found:</strong> xyz" in html


def test_build_without_attributes_fails(tmp_path):
    out = tmp_path / "index.html"
    code = main(["--data", str(_upload(tmp_path)), "--out", str(out)])
    assert code == EXIT_FAILURE
    assert not out.exists()


def test_build_without_city_column_fails(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("town,population\nTirana,1\n", encoding="utf-8")
    out = tmp_path / "index.html"
    assert main(["--data", str(path), "-a", "population", "--out", str(out)]) == EXIT_FAILURE
    assert not out.exists()


def test_list_attributes_prints_selectable_columns(tmp_path, capsys):
    code = main(["--data", str(_upload(tmp_path)), "--list-attributes"])
    assert code == EXIT_SUCCESS
    assert capsys.readouterr().out.split() == ["population", "unemployment"]


def test_list_cities_prints_gazetteer(capsys):
    assert main(["--list-cities"]) == EXIT_SUCCESS
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Tirana"
    assert "Vau i Dejës" in lines
