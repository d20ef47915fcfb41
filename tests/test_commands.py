import pytest

from beamoffsets import commands
from beamoffsets.config import FixOptions
from beamoffsets.host.hypermesh import HyperMeshHost
from beamoffsets.main import main, parse_args


def test_fix_beam_offsets_returns_count(three_beam_host):
    assert commands.fix_beam_offsets(three_beam_host) == 2
    assert commands.fix_beam_offsets(three_beam_host) == 0


def test_fix_beam_messages(three_beam_host):
    assert commands.fix_beam(1, three_beam_host) is True
    assert commands.fix_beam(2, three_beam_host) is False
    assert three_beam_host.console_lines == [
        "Fixed beam element 1",
        "No fix needed for beam element 2 (OFFT is already BOO)",
    ]


def test_analyze_beams_command(three_beam_host):
    report = commands.analyze_beams(three_beam_host)
    assert report.counts() == {"bgg": 2, "boo": 1, "other": 0, "total": 3}


def test_run_on_load(three_beam_host):
    result = commands.run_on_load(three_beam_host, FixOptions(quiet=True))
    assert result.fixed_count == 2
    assert three_beam_host.console_lines == ["", "Running beam offset fix...", ""]


def test_commands_bind_to_session_by_default(monkeypatch, three_beam_host):
    monkeypatch.setattr(HyperMeshHost, "from_session", classmethod(lambda cls: three_beam_host))
    assert commands.fix_beam_offsets() == 2


def test_parse_args_defaults():
    args = parse_args([])
    assert not args.analyze
    assert args.element is None
    assert args.round_offsets is True


def test_analyze_and_element_are_exclusive():
    with pytest.raises(SystemExit):
        parse_args(["--analyze", "--element", "3"])


def test_main_runs_full_fix(three_beam_host):
    assert main([], host=three_beam_host) == 0
    assert three_beam_host.elements[1].offset_type == "BOO"
    assert "Running beam offset fix..." in three_beam_host.console_lines


def test_main_single_element(three_beam_host):
    assert main(["--element", "3"], host=three_beam_host) == 0
    assert three_beam_host.elements[3].offset_type == "BOO"
    assert three_beam_host.elements[1].offset_type == "BGG"


def test_main_no_round(three_beam_host):
    three_beam_host.elements[1].offset_a = (1.0, 0.0, 2.4)
    main(["--no-round", "--quiet"], host=three_beam_host)
    assert three_beam_host.elements[1].offset_a == (1.0, 2.4, 0.0)


def test_main_analyze_writes_csv(tmp_path, three_beam_host):
    path = tmp_path / "report.csv"
    assert main(["--analyze", "--report-csv", str(path)], host=three_beam_host) == 0
    assert path.exists()
    assert three_beam_host.write_count() == 0


def test_main_env_disables_rounding(monkeypatch, three_beam_host):
    monkeypatch.setenv("BEAMOFFSETS_ROUND", "no")
    three_beam_host.elements[1].offset_a = (1.0, 0.0, 2.4)
    main([], host=three_beam_host)
    assert three_beam_host.elements[1].offset_a == (1.0, 2.4, 0.0)


def test_main_outside_host(monkeypatch):
    import sys
    monkeypatch.setitem(sys.modules, "hw", None)
    assert main([]) == 1


def test_fix_beam_reports_skipped_element(three_beam_host):
    three_beam_host.fail_on_read.add(1)
    assert commands.fix_beam(1, three_beam_host) is False
    assert three_beam_host.console_lines == ["Could not fix beam element 1 (skipped after an error)"]


def test_report_csv_requires_analyze():
    with pytest.raises(SystemExit):
        parse_args(["--report-csv", "report.csv"])


def test_invalid_env_flag_is_a_usage_error(monkeypatch, three_beam_host):
    monkeypatch.setenv("BEAMOFFSETS_QUIET", "sometimes")
    with pytest.raises(SystemExit) as exc:
        main([], host=three_beam_host)
    assert exc.value.code == 2
    assert three_beam_host.write_count() == 0


def test_env_flags_merge_into_options(monkeypatch):
    monkeypatch.setenv("BEAMOFFSETS_DEBUG", "1")
    args = parse_args(["--quiet"])
    assert args.options == FixOptions(debug=True, quiet=True, round_offsets=True)
