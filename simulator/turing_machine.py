import multiprocessing
from collections import namedtuple

from simulator.description import PLACEHOLDER, render_description
from simulator.tape import BLANK, Tape
from simulator.transition_table import MOVES

DEFAULT_MAX_STEPS = 100_000

# === Verdicts ===
ACCEPTED = "accepted"
REJECTED = "rejected"
ABORTED = "aborted"

# === Abort reasons ===
STEP_LIMIT_EXCEEDED = "step_limit_exceeded"
INVALID_MOVE = "invalid_move"

SimulationResult = namedtuple("SimulationResult", ["input", "trace", "verdict", "reason", "steps"])


class TuringMachine:
    """Runs a transition table with one cache register against input strings.

    The table is only read; tape, head, state and cache are reset for every
    input, so one table can back any number of machines.
    """

    def __init__(self, table, max_steps=DEFAULT_MAX_STEPS, placeholder=PLACEHOLDER):
        if max_steps < 0:
            raise ValueError(f"max_steps must be non-negative, got {max_steps}")
        self.table = table
        self.max_steps = max_steps
        self.placeholder = placeholder
        self.reset()

    def reset(self, input_string=""):
        self.tape = Tape.from_string(input_string)
        self.head = 0
        self.current_state = self.table.initial_state
        self.cache = BLANK
        self.steps = 0

    def describe(self):
        return render_description(self.tape, self.head, self.current_state, self.cache, self.placeholder)

    def step(self):
        """Apply one transition.

        Returns None while the machine keeps running, otherwise the
        ``(verdict, reason)`` pair that ends the run. The final state halts
        before any lookup, so rules leaving it never fire.
        """
        if self.current_state == self.table.final_state:
            return ACCEPTED, None

        tr = self.table.lookup(self.current_state, self.cache, self.tape.read(self.head))
        if tr is None:
            return REJECTED, None
        if tr.move not in MOVES:
            return ABORTED, INVALID_MOVE

        self.tape.write(self.head, tr.write_symbol)
        self.cache = tr.to_cache
        self.head += MOVES[tr.move]
        self.current_state = tr.to_state
        self.steps += 1
        return None

    def simulate(self, input_string):
        self.reset(input_string)
        trace = [self.describe()]

        while True:
            outcome = self.step()
            if outcome is not None:
                verdict, reason = outcome
                break
            trace.append(self.describe())
            if self.steps > self.max_steps:
                verdict, reason = ABORTED, STEP_LIMIT_EXCEEDED
                break

        return SimulationResult(input_string, trace, verdict, reason, self.steps)

    def run_many(self, inputs, workers=1):
        """Simulate every input; results come back in input order."""
        inputs = list(inputs)
        if workers <= 1 or len(inputs) <= 1:
            return [self.simulate(s) for s in inputs]

        with multiprocessing.Pool(processes=min(workers, len(inputs))) as pool:
            return pool.map(_simulate_one, [(self, s) for s in inputs])


def _simulate_one(job):
    machine, input_string = job
    return machine.simulate(input_string)
