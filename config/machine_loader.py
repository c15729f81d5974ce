from collections import namedtuple

import yaml

from simulator.errors import ConfigLoadError, ConfigParseError
from simulator.tape import BLANK
from simulator.transition_table import Transition, normalize_move

DEFAULT_MACHINE_PATH = "info.yaml"

_NUMERIC_TAGS = ("tag:yaml.org,2002:int", "tag:yaml.org,2002:float")


class SymbolLoader(yaml.SafeLoader):
    """SafeLoader that keeps numeric-looking scalars as text.

    Symbols such as 0101 or 00 would otherwise come back as ints (YAML 1.1
    reads 0101 as octal 65). Booleans and null still resolve.
    """


SymbolLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in _NUMERIC_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}

MachineDescription = namedtuple(
    "MachineDescription",
    ["states", "initial_state", "final_state", "alphabet", "tape_alphabet", "transitions", "simulation_strings"],
)


def _token(value, field, allow_blank=True):
    """Coerce a YAML scalar to a symbol or label; null means blank."""
    if value is None:
        value = BLANK
    if isinstance(value, (dict, list)):
        raise ConfigParseError(f"'{field}' must be a scalar, got {type(value).__name__}")
    if isinstance(value, bool):
        # YAML 1.1 reads bare yes/no/on/off as booleans
        raise ConfigParseError(f"'{field}' must be quoted, got boolean {value}")
    value = str(value)
    if not allow_blank and value == BLANK:
        raise ConfigParseError(f"'{field}' must not be empty")
    return value


def _section(data, key, expected_type):
    if key not in data:
        raise ConfigParseError(f"Missing required section: {key}")
    value = data[key]
    if value is None and expected_type is list:
        return []
    if not isinstance(value, expected_type):
        raise ConfigParseError(f"Section '{key}' expected {expected_type.__name__}, got {type(value).__name__}")
    return value


def _token_list(data, key, allow_blank=False):
    return [_token(v, f"{key}[{i}]", allow_blank) for i, v in enumerate(_section(data, key, list))]


def _parse_delta_item(index, item):
    where = f"delta[{index}]"
    if not isinstance(item, dict):
        raise ConfigParseError(f"{where} must be a mapping")
    params = _section(item, "params", dict)
    output = _section(item, "output", dict)

    if "initial_state" not in params:
        raise ConfigParseError(f"{where}.params is missing 'initial_state'")
    if "final_state" not in output:
        raise ConfigParseError(f"{where}.output is missing 'final_state'")

    return Transition(
        from_state=_token(params["initial_state"], f"{where}.params.initial_state", allow_blank=False),
        from_cache=_token(params.get("mem_cache_value"), f"{where}.params.mem_cache_value"),
        read_symbol=_token(params.get("tape_input"), f"{where}.params.tape_input"),
        to_state=_token(output["final_state"], f"{where}.output.final_state", allow_blank=False),
        to_cache=_token(output.get("mem_cache_value"), f"{where}.output.mem_cache_value"),
        write_symbol=_token(output.get("tape_output"), f"{where}.output.tape_output"),
        move=normalize_move(_token(output.get("tape_displacement"), f"{where}.output.tape_displacement")),
    )


def parse_machine(data):
    """Turn an already-decoded YAML document into a MachineDescription."""
    if not isinstance(data, dict):
        raise ConfigParseError("Machine description root must be a mapping")

    q_states = _section(data, "q_states", dict)
    for key in ("q_list", "initial", "final"):
        if key not in q_states:
            raise ConfigParseError(f"q_states is missing '{key}'")

    return MachineDescription(
        states=_token_list(q_states, "q_list"),
        initial_state=_token(q_states["initial"], "q_states.initial", allow_blank=False),
        final_state=_token(q_states["final"], "q_states.final", allow_blank=False),
        alphabet=_token_list(data, "alphabet"),
        tape_alphabet=_token_list(data, "tape_alphabet"),
        transitions=[_parse_delta_item(i, item) for i, item in enumerate(_section(data, "delta", list))],
        simulation_strings=_token_list(data, "simulation_strings", allow_blank=True) if "simulation_strings" in data else [],
    )


def load_machine(path=DEFAULT_MACHINE_PATH):
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as e:
        raise ConfigLoadError(f"Cannot read machine description {path}: {e}") from e

    try:
        data = yaml.load(text, Loader=SymbolLoader)
    except yaml.YAMLError as e:
        raise ConfigParseError(f"Invalid YAML in {path}: {e}") from e

    return parse_machine(data)
