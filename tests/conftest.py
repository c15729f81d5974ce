import pytest

from simulator.tape import BLANK
from simulator.transition_table import Transition, TransitionTable

SCANNER_YAML = """
q_states:
  q_list: [q0, qf]
  initial: q0
  final: qf
alphabet: ["1"]
tape_alphabet: ["1"]
delta:
  - params: {initial_state: q0, mem_cache_value: "", tape_input: 1}
    output: {final_state: q0, mem_cache_value: "", tape_output: 1, tape_displacement: R}
  - params: {initial_state: q0, mem_cache_value: "", tape_input: ""}
    output: {final_state: qf, mem_cache_value: "", tape_output: "", tape_displacement: S}
simulation_strings: ["111", ""]
"""


def make_table(transitions=(), initial="q0", final="qf", states=("q0", "qf")):
    return TransitionTable(list(states), initial, final, ["1"], ["1"], list(transitions))


@pytest.fixture
def scanner():
    """q0 walks right over 1s and moves to qf on the first blank."""
    return make_table([
        Transition("q0", BLANK, "1", "q0", BLANK, "1", "R"),
        Transition("q0", BLANK, BLANK, "qf", BLANK, BLANK, "S"),
    ])


@pytest.fixture
def stay_loop():
    return make_table([Transition("q0", BLANK, BLANK, "q0", BLANK, BLANK, "S")])


@pytest.fixture
def scanner_file(tmp_path):
    path = tmp_path / "scanner.yaml"
    path.write_text(SCANNER_YAML, encoding="utf-8")
    return path


@pytest.fixture
def table_factory():
    return make_table
