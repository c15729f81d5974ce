from collections import namedtuple

from simulator.errors import (
    AmbiguousTransitionError,
    InvalidMoveError,
    UndeclaredStateError,
    UndeclaredSymbolError,
)
from simulator.tape import BLANK

# Head displacement per move code
MOVES = {"L": -1, "R": 1, "S": 0}

Transition = namedtuple(
    "Transition",
    ["from_state", "from_cache", "read_symbol", "to_state", "to_cache", "write_symbol", "move"],
)


def normalize_move(code):
    """Documents may use lower case, and an empty code means stay."""
    code = (code or "").strip().upper()
    return code or "S"


class TransitionTable:
    """Partial function (state, cache, symbol) -> Transition.

    Built once from the machine description and never mutated afterwards.
    Every state, symbol and move referenced by a transition is checked
    against the declared sets while building.
    """

    def __init__(self, states, initial_state, final_state, alphabet, tape_alphabet, transitions=()):
        self.states = tuple(states)
        self.initial_state = initial_state
        self.final_state = final_state
        self.alphabet = tuple(alphabet)
        self.tape_alphabet = tuple(tape_alphabet)

        self._state_set = frozenset(self.states)
        self._symbol_set = frozenset(self.alphabet) | frozenset(self.tape_alphabet) | {BLANK}

        for label, state in (("initial", initial_state), ("final", final_state)):
            if state not in self._state_set:
                raise UndeclaredStateError(f"{label.capitalize()} state {state!r} is not in the state list")

        self._transitions = []
        self._index = {}
        for tr in transitions:
            self._add(tr)

    def _add(self, tr):
        for state in (tr.from_state, tr.to_state):
            if state not in self._state_set:
                raise UndeclaredStateError(f"Transition {tuple(tr)} references undeclared state {state!r}")
        for sym in (tr.from_cache, tr.read_symbol, tr.to_cache, tr.write_symbol):
            if sym not in self._symbol_set:
                raise UndeclaredSymbolError(f"Transition {tuple(tr)} references undeclared symbol {sym!r}")
        if tr.move not in MOVES:
            raise InvalidMoveError(f"Transition {tuple(tr)} has invalid move {tr.move!r}")

        key = (tr.from_state, tr.from_cache, tr.read_symbol)
        if key in self._index:
            raise AmbiguousTransitionError(key)
        self._index[key] = tr
        self._transitions.append(tr)

    @classmethod
    def from_description(cls, desc):
        return cls(
            desc.states,
            desc.initial_state,
            desc.final_state,
            desc.alphabet,
            desc.tape_alphabet,
            desc.transitions,
        )

    def lookup(self, state, cache, symbol):
        return self._index.get((state, cache, symbol))

    def __len__(self):
        return len(self._transitions)

    def __iter__(self):
        return iter(self._transitions)
