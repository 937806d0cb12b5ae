import json

import pytest

from station_uptime.main import main


def _write(tmp_path, text):
    path = tmp_path / "input.txt"
    path.write_text(text, encoding="utf-8")
    return path


def test_main_prints_station_lines(report_file, capsys):
    main([str(report_file)])
    assert capsys.readouterr().out == "0 100\n1 0\n2 75\n"


def test_main_json_output(report_file, tmp_path):
    output = tmp_path / "out" / "availability.json"
    main([str(report_file), "--format", "json", "--output", str(output)])
    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload["stations"][2] == {
        "station_id": 2,
        "availability": 75,
        "available_time": 150000,
        "total_time": 200000,
    }


def test_main_html_output(report_file, capsys):
    main([str(report_file), "--format", "html"])
    page = capsys.readouterr().out
    assert "<td>2</td><td>75%</td>" in page
    assert "Stations with data: 3" in page


@pytest.mark.parametrize(
    "text, code",
    [
        ("1 1001\n", 2),
        ("[Stations]\nA 1001\n", 2),
        (
            "[Stations]\n1 10\n[Charger Availability Reports]\n"
            "10 0 100 true\n10 50 150 false\n",
            3,
        ),
        ("[Charger Availability Reports]\n10 100 0 true\n", 4),
    ],
)
def test_main_exit_codes(tmp_path, capsys, text, code):
    path = _write(tmp_path, text)
    with pytest.raises(SystemExit) as exc_info:
        main([str(path)])
    assert exc_info.value.code == code
    assert capsys.readouterr().out == ""


def test_main_missing_file(tmp_path):
    with pytest.raises(SystemExit) as exc_info:
        main([str(tmp_path / "nope.txt")])
    assert exc_info.value.code == 1


def test_main_without_input(monkeypatch):
    monkeypatch.delenv("STATION_UPTIME_DATA_URL", raising=False)
    with pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == 1


def test_main_empty_result(tmp_path, capsys):
    path = _write(tmp_path, "[Stations]\n1 10\n[Charger Availability Reports]\n")
    main([str(path)])
    assert capsys.readouterr().out == ""


def test_main_invalid_utf8(tmp_path, capsys):
    path = tmp_path / "input.txt"
    path.write_bytes(b"[Stations]\n1 10\n[Charger Availability Reports]\n10 0 100 tr\xffue\n")
    with pytest.raises(SystemExit) as exc_info:
        main([str(path)])
    assert exc_info.value.code == 2
    assert capsys.readouterr().out == ""


def test_main_rejects_file_and_url(report_file, capsys):
    with pytest.raises(SystemExit) as exc_info:
        main([str(report_file), "--url", "http://example.test/reports"])
    assert exc_info.value.code == 2
    assert "not allowed with" in capsys.readouterr().err
