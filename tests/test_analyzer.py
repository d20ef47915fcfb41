import csv

from beamoffsets.config import FixOptions
from beamoffsets.controller.analyzer import OffsetStatus, analyze_beams, classify_offset_type
from beamoffsets.host.memory import InMemoryHost
from beamoffsets.model.element import BeamElement


def make_host() -> InMemoryHost:
    return InMemoryHost([
        BeamElement(1, "BGG", (1.0, 0.0, 2.0), (1.0, 0.0, 2.0)),
        BeamElement(2, "BGG", (0.0, 0.0, 5.0), (0.0, 0.0, 5.0)),
        BeamElement(3, "BOO", (5.0, 0.0, 0.0), (0.0, 0.0, 0.0)),
        BeamElement(4, "GOO", (0.0, 0.0, 0.0), (0.0, 0.0, 0.0)),
    ])


def test_counts():
    report = analyze_beams(make_host())
    assert report.counts() == {"bgg": 2, "boo": 1, "other": 1, "total": 4}


def test_analysis_is_read_only():
    host = make_host()
    analyze_beams(host)
    assert host.write_count() == 0
    assert host.autoupdate_calls == []
    assert host.elements[1].offset_type == "BGG"


def test_unset_tag_needs_correction():
    assert classify_offset_type("") is OffsetStatus.NEEDS_CORRECTION
    host = InMemoryHost([BeamElement(1, 0), BeamElement(2, "0")])
    report = analyze_beams(host)
    assert report.bgg == 2
    assert report.other == 0


def test_table_is_printed():
    host = make_host()
    analyze_beams(host)
    table = host.console_lines[-1]
    assert table.splitlines()[0].split()[:3] == ["Elem", "ID", "OFFT"]
    assert len(table.splitlines()) == 2 + 4
    assert "GOO" in table and "other" in table
    assert host.console_lines[0].startswith("Beam elements: 4 total, 2 need correction")


def test_quiet_analysis_prints_nothing():
    host = make_host()
    analyze_beams(host, FixOptions(quiet=True))
    assert host.console_lines == []


def test_unreadable_element_is_skipped():
    host = make_host()
    host.fail_on_read.add(3)
    report = analyze_beams(host)
    assert report.total == 3
    assert report.skipped[0][0] == 3


def test_empty_model():
    host = InMemoryHost()
    report = analyze_beams(host)
    assert report.total == 0
    assert host.console_lines == ["No beam elements found in model"]


def test_write_csv(tmp_path):
    report = analyze_beams(make_host())
    path = tmp_path / "offsets.csv"
    report.write_csv(str(path))

    with open(path, newline='', encoding='utf-8') as f:
        rows = list(csv.reader(f))
    assert rows[0][0] == "elem_id"
    assert rows[1] == ["1", "BGG", "1.0", "0.0", "2.0", "1.0", "0.0", "2.0", "needs correction"]
    assert len(rows) == 5


def test_numeric_tag_counts_as_other():
    host = InMemoryHost([BeamElement(1, 3), BeamElement(2, "BOO")])
    report = analyze_beams(host)
    assert report.counts() == {"bgg": 0, "boo": 1, "other": 1, "total": 2}
    assert report.skipped == []
