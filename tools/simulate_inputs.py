# tools/simulate_inputs.py

import argparse
from pathlib import Path

from rich.progress import Progress, SpinnerColumn, BarColumn, TextColumn, TimeElapsedColumn

from config.machine_loader import load_machine
from logger.logger import JSONLogger
from simulator.transition_table import TransitionTable
from simulator.turing_machine import DEFAULT_MAX_STEPS, TuringMachine

EMPTY_INPUT = '""'


# === Utility Loaders ===
def load_inputs(inputs_file):
    """One input per line; a line holding only "" stands for the empty input."""
    inputs = []
    with open(inputs_file, "r", encoding="utf-8") as f:
        for line in f:
            line = line.rstrip("\n").strip()
            if not line:
                continue
            inputs.append("" if line == EMPTY_INPUT else line)
    return inputs


def console_message(msg):
    print(f"[{Path.cwd().name}] {msg}")


# === Main Simulation Runner ===
def simulate_inputs(machine_file, inputs_file, output_directory="logs/", batch_size=256, max_steps=DEFAULT_MAX_STEPS):
    desc = load_machine(machine_file)
    machine = TuringMachine(TransitionTable.from_description(desc), max_steps=max_steps)
    machine_name = Path(machine_file).stem
    logger = JSONLogger(output_directory, log_file_prefix=f"{machine_name}_")

    inputs = load_inputs(inputs_file)
    console_message(f"Loaded {len(inputs):,} inputs for {machine_name}.")

    counts = {}
    for batch_start in range(0, len(inputs), batch_size):
        batch = inputs[batch_start:batch_start + batch_size]
        console_message(f"Processing batch {batch_start // batch_size + 1} with {len(batch):,} inputs...")

        with Progress(
                SpinnerColumn(),
                BarColumn(),
                "[progress.percentage]{task.percentage:>3.0f}%",
                TextColumn("{task.completed}/{task.total} Inputs"),
                TimeElapsedColumn()
        ) as progress:

            task = progress.add_task("[cyan]Simulating...", total=len(batch))

            batch_results = []
            for input_string in batch:
                result = machine.simulate(input_string)
                batch_results.append(result)
                counts[result.verdict] = counts.get(result.verdict, 0) + 1
                progress.update(task, advance=1)

            # === BULK WRITE once per batch ===
            logger.log_results(machine_name, batch_results)

    summary = ", ".join(f"{verdict}={n}" for verdict, n in sorted(counts.items()))
    console_message(f"[SUCCESS] All inputs simulated ({summary or 'none'}). Results in {logger.current_log}")
    return counts


# === CLI ===
def main(argv=None):
    parser = argparse.ArgumentParser(description="Simulate a file of input strings against one machine description.")
    parser.add_argument("--config", required=True, help="Path to the YAML machine description")
    parser.add_argument("--inputs", required=True, help="Path to the inputs file (one input per line)")
    parser.add_argument("--output", default="logs/", help="Directory for the JSON lines results")
    parser.add_argument("--batch_size", type=int, default=256, help="Inputs per progress bar and log write")
    parser.add_argument("--max_steps", type=int, default=DEFAULT_MAX_STEPS, help="Maximum steps before a run is aborted")
    args = parser.parse_args(argv)

    simulate_inputs(
        args.config,
        args.inputs,
        output_directory=args.output,
        batch_size=args.batch_size,
        max_steps=args.max_steps,
    )


if __name__ == "__main__":
    main()
