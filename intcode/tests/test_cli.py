import pytest

from intcode.cli import build_arg_parser, main

ECHO = [3, 100, 4, 100, 1008, 100, 10, 101, 1006, 101, 0, 104, 1000, 99]
SERIES = [3, 15, 3, 16, 1002, 16, 10, 16, 1, 16, 15, 15, 4, 15, 99, 0, 0]
RELAY = [
    3, 100, 1005, 100, 11, 104, 1, 104, 5, 104, 6, 3, 101, 1008, 101, -1, 102,
    1005, 102, 11, 3, 103, 104, 255, 4, 101, 4, 103, 1105, 1, 11,
]


def test_prints_address_zero_without_output(program_file, capsys):
    path = program_file([1, 9, 10, 3, 2, 3, 11, 0, 99, 30, 40, 50])
    assert main([str(path)]) == 0
    assert capsys.readouterr().out.strip() == "[0] = 3500"


def test_inputs_and_outputs(program_file, compare_to_8, capsys):
    path = program_file(compare_to_8)
    assert main([str(path), "-i", "8"]) == 0
    assert capsys.readouterr().out.splitlines() == ["1000"]


def test_patches(program_file, capsys):
    path = program_file([1, 0, 0, 0, 99])
    assert main([str(path), "--patch", "1=4", "-p", "2=4"]) == 0
    assert capsys.readouterr().out.strip() == "[0] = 198"


def test_bad_patch_rejected(program_file):
    path = program_file([99])
    with pytest.raises(SystemExit):
        build_arg_parser().parse_args([str(path), "--patch", "1"])


def test_unknown_opcode_reported(program_file, capsys):
    path = program_file([42])
    assert main([str(path)]) == 1
    assert "unknown opcode 42 at pc 0" in capsys.readouterr().err


def test_starved_program_reported(program_file, capsys):
    path = program_file([3, 0, 99])
    assert main([str(path)]) == 1
    assert "waiting for input" in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.txt")]) == 1
    assert "intcode:" in capsys.readouterr().err


def test_step_limit(program_file, capsys):
    path = program_file([1105, 1, 0])
    assert main([str(path), "--max-steps", "50"]) == 1
    assert "step limit 50" in capsys.readouterr().err


def test_ascii_lines(program_file, capsys):
    path = program_file(ECHO)
    assert main([str(path), "--line", "hi"]) == 0
    assert capsys.readouterr().out == "hi\n1000\n"


def test_disassemble(program_file, capsys):
    path = program_file([104, 5, 99])
    assert main([str(path), "--disassemble"]) == 0
    out = capsys.readouterr().out
    assert "OUT 5" in out
    assert "HALT" in out


def test_amplifier_search(program_file, capsys):
    path = program_file(SERIES)
    assert main([str(path), "--amplifiers", "series"]) == 0
    assert capsys.readouterr().out.strip() == "43210 phases=4,3,2,1,0"


@pytest.mark.parametrize("mode", ["first", "nat"])
def test_network(program_file, capsys, mode):
    path = program_file(RELAY)
    assert main([str(path), "--network", mode, "--network-size", "2"]) == 0
    assert capsys.readouterr().out.strip() == "6"


def test_log_level_from_environment(monkeypatch):
    monkeypatch.setenv("INTCODE_LOG", "DEBUG")
    args = build_arg_parser().parse_args(["prog.txt"])
    assert args.log_level == "DEBUG"
