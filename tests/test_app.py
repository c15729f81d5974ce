import json
from pathlib import Path

import app

REPO_ROOT = Path(__file__).resolve().parents[1]

LOOP_YAML = """
q_states: {q_list: [q0, qf], initial: q0, final: qf}
alphabet: ["1"]
tape_alphabet: ["1"]
delta:
  - params: {initial_state: q0, tape_input: ""}
    output: {final_state: q0, tape_output: "", tape_displacement: S}
simulation_strings: ["", "1"]
"""

AMBIGUOUS_YAML = """
q_states: {q_list: [q0, qf], initial: q0, final: qf}
alphabet: ["1"]
tape_alphabet: ["1"]
delta:
  - params: {initial_state: q0, tape_input: "1"}
    output: {final_state: qf, tape_output: "1", tape_displacement: R}
  - params: {initial_state: q0, tape_input: "1"}
    output: {final_state: q0, tape_output: "1", tape_displacement: L}
simulation_strings: ["1"]
"""


def _write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_scanner_run_prints_trace_and_verdicts(scanner_file, capsys):
    assert app.main(["--config", str(scanner_file)]) == 0

    out = capsys.readouterr().out
    assert "Machine loaded" in out
    assert 'Simulating input: "111"' in out
    assert "  0:  (q0) 111    [mem=_]  head=0" in out
    assert "  4: 111 (qf) _    [mem=_]  head=3" in out
    assert out.count(">> Result: ACCEPTED (reached final state qf)") == 2


def test_bundled_machine_compares_first_and_last_symbol(monkeypatch, capsys):
    monkeypatch.chdir(REPO_ROOT)
    assert app.main([]) == 0

    out = capsys.readouterr().out
    assert out.count(">> Result: ACCEPTED") == 3
    assert out.count(">> Result: REJECTED") == 2


def test_step_limit_abort_does_not_stop_batch(tmp_path, capsys):
    path = _write(tmp_path, "loop.yaml", LOOP_YAML)
    assert app.main(["--config", path, "--max-steps", "3"]) == 0

    out = capsys.readouterr().out
    assert ">> Result: ABORTED (step_limit_exceeded) after 4 steps" in out
    assert ">> Result: REJECTED" in out
    assert "  4:  (q0) _    [mem=_]  head=0" in out


def test_missing_machine_file_exits_non_zero(tmp_path, capsys):
    assert app.main(["--config", str(tmp_path / "absent.yaml")]) == 1
    assert "Error loading machine description" in capsys.readouterr().err


def test_ambiguous_table_exits_non_zero(tmp_path, capsys):
    path = _write(tmp_path, "ambiguous.yaml", AMBIGUOUS_YAML)
    assert app.main(["--config", path]) == 1
    assert "Duplicate transition" in capsys.readouterr().err


def test_bad_runtime_config_exits_non_zero(scanner_file, tmp_path, capsys):
    runtime = _write(tmp_path, "runtime.json", json.dumps({"workers": 0}))
    assert app.main(["--config", str(scanner_file), "--runtime-config", runtime]) == 1
    assert "Error loading runtime config" in capsys.readouterr().err


def test_log_flag_appends_results(scanner_file, tmp_path, capsys):
    logs = tmp_path / "logs"
    runtime = _write(tmp_path, "runtime.json", json.dumps({"output_directory": str(logs)}))
    assert app.main(["--config", str(scanner_file), "--runtime-config", runtime, "--log"]) == 0

    [log_file] = list(logs.glob("tm_*.jsonl"))
    entries = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
    assert [e["input"] for e in entries] == ["111", ""]
    assert all(e["machine"] == "scanner" for e in entries)
    assert "Results appended to" in capsys.readouterr().out


def test_command_line_overrides_are_validated(scanner_file, capsys):
    assert app.main(["--config", str(scanner_file), "--workers", "0"]) == 1
    assert "Error loading runtime config: workers must be at least 1." in capsys.readouterr().err

    assert app.main(["--config", str(scanner_file), "--max-steps", "-1"]) == 1
    err = capsys.readouterr().err
    assert "Error loading runtime config: max_steps must be non-negative." in err
    assert "machine description" not in err
