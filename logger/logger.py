import json
import os
from datetime import datetime, timezone

from simulator.turing_machine import ACCEPTED


class JSONLogger:
    """Appends simulation records to dated JSON lines files."""

    def __init__(self, output_directory="logs/", log_file_prefix="tm_"):
        self.output_directory = output_directory
        self.log_file_prefix = log_file_prefix
        os.makedirs(self.output_directory, exist_ok=True)
        self.today = datetime.now(timezone.utc).strftime("%Y-%m-%d")
        self.current_log = self._path(self.log_file_prefix)

    def _path(self, prefix):
        return os.path.join(self.output_directory, f"{prefix}{self.today}.jsonl")

    def _append(self, path, entries):
        lines = "".join(json.dumps(entry) + "\n" for entry in entries)
        with open(path, "a", encoding="utf-8") as f:
            f.write(lines)

    def log_batch(self, entries: list):
        """Summaries, one line per simulated input."""
        self._append(self.current_log, entries)

    def log_accepted(self, entries: list):
        """Log full traces of accepted inputs."""
        self._append(self._path("accepted_"), entries)

    def log_not_accepted(self, entries: list):
        """Log full traces of rejected and aborted inputs."""
        self._append(self._path("not_accepted_"), entries)

    def log_results(self, machine_name, results):
        """Summaries go to the main log, full traces to the split logs."""
        self.log_batch([result_entry(machine_name, r) for r in results])

        accepted = [result_entry(machine_name, r, include_trace=True) for r in results if r.verdict == ACCEPTED]
        not_accepted = [result_entry(machine_name, r, include_trace=True) for r in results if r.verdict != ACCEPTED]
        if accepted:
            self.log_accepted(accepted)
        if not_accepted:
            self.log_not_accepted(not_accepted)


def result_entry(machine_name, result, include_trace=False):
    entry = {
        "machine": machine_name,
        "input": result.input,
        "verdict": result.verdict,
        "reason": result.reason,
        "steps": result.steps,
        "trace_length": len(result.trace),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if include_trace:
        entry["trace"] = list(result.trace)
    return entry
