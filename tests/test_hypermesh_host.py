import pytest

from beamoffsets.config import FixOptions, RecomputeOptions
from beamoffsets.controller.fixer import fix_all_beam_offsets
from beamoffsets.errors import HostError, HostUnavailableError
from beamoffsets.host.base import OffsetEnd
from beamoffsets.host.hypermesh import HyperMeshHost, format_vector, parse_id_list, tcl_quote
from beamoffsets.main import main


class RecordingTcl:
    """Stands in for hw.evalTcl with canned hm_getvalue answers."""

    def __init__(self, beams, values):
        self.beams = beams
        self.values = values
        self.commands = []

    def __call__(self, command):
        self.commands.append(command)
        if command.startswith("hm_getmark"):
            return " ".join(str(i) for i in self.beams)
        if command.startswith("hm_getvalue"):
            words = dict(w.split("=", 1) for w in command.split()[2:])
            key = (int(words["id"]), words["dataname"])
            if key not in self.values:
                raise RuntimeError(f"no data for {key}")
            return self.values[key]
        return ""


def test_tcl_quote_escapes_substitutions():
    assert tcl_quote('Fix [all] $x "now"') == '"Fix \\[all\\] \\$x \\"now\\""'


def test_format_vector():
    assert format_vector((1.0, 2.0, 0.0)) == "{1.0 2.0 0.0}"


def test_parse_id_list():
    assert parse_id_list("{1 2} 3") == [1, 2, 3]
    assert parse_id_list("") == []
    with pytest.raises(HostError):
        parse_id_list("1 two")


def test_recompute_arguments():
    assert RecomputeOptions().as_arguments() == (
        "orient=0 allshells=0 thickness=avg offsetnormal=pos offsetlateral=neg "
        "adjustoffset=all offsetends=startend"
    )


def test_beam_query_clears_its_mark():
    tcl = RecordingTcl([4, 5], {})
    host = HyperMeshHost(tcl)
    assert host.beam_element_ids() == [4, 5]
    assert tcl.commands == [
        '*createmark elems 1 "by config" 60',
        "hm_getmark elems 1",
        "*clearmark elems 1",
    ]


def test_evaluator_failures_become_host_errors():
    host = HyperMeshHost(RecordingTcl([], {}))
    with pytest.raises(HostError):
        host.get_offset(7, OffsetEnd.A)


def test_full_fix_command_sequence(capsys):
    tcl = RecordingTcl([1, 2], {
        (1, "1dofft"): "BGG",
        (1, "offseta"): "1.0 0.0 2.0",
        (1, "offsetb"): "1.0 0.0 2.0",
        (2, "1dofft"): "BOO",
    })
    host = HyperMeshHost(tcl)

    result = fix_all_beam_offsets(host, FixOptions())

    assert result.fixed_ids == [1]
    updates = [c for c in tcl.commands if c.startswith("*setvalue") or c.startswith("*autoupdate")]
    assert updates == [
        "*setvalue elems mark=1 STATUS=2 offseta={1.0 2.0 0.0}",
        "*setvalue elems mark=1 STATUS=2 offsetb={1.0 2.0 0.0}",
        "*autoupdate1delems mark=1 orient=0 allshells=0 thickness=avg offsetnormal=pos "
        "offsetlateral=neg adjustoffset=all offsetends=startend",
    ]
    assert "Fixed offsets on 1 beam element(s) in 1 groups" in capsys.readouterr().out
    assert tcl.commands[-1] == 'hm_usermessage "Fixed offsets on 1 beam element(s) in 1 groups"'


def test_from_session_outside_host(monkeypatch):
    import sys
    monkeypatch.setitem(sys.modules, "hw", None)
    with pytest.raises(HostUnavailableError):
        HyperMeshHost.from_session()


def test_empty_mark_is_refused():
    tcl = RecordingTcl([], {})
    host = HyperMeshHost(tcl)
    with pytest.raises(HostError):
        host.create_mark([])
    assert tcl.commands == []


def test_debug_run_prints_each_console_line_once(capsys):
    tcl = RecordingTcl([1], {
        (1, "1dofft"): "BGG",
        (1, "offseta"): "1.0 0.0 2.0",
        (1, "offsetb"): "1.0 0.0 2.0",
    })

    assert main(["--debug"], host=HyperMeshHost(tcl)) == 0

    captured = capsys.readouterr()
    lines = [line for line in captured.out.splitlines() if line]
    assert "Fixed offsets on 1 beam element(s) in 1 groups" in lines
    assert len(lines) == len(set(lines))
    # Debug records go to stderr, not to the host console
    assert "tcl: hm_getmark elems 1" in captured.err
    assert "tcl:" not in captured.out
