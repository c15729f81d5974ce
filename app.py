# app.py

import argparse
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from config.config_loader import load_config
from config.machine_loader import DEFAULT_MACHINE_PATH, load_machine
from logger.logger import JSONLogger
from simulator.description import display_symbol
from simulator.errors import MachineError
from simulator.transition_table import TransitionTable
from simulator.turing_machine import ACCEPTED, REJECTED, TuringMachine

console = Console(soft_wrap=True)
error_console = Console(stderr=True, soft_wrap=True)


# === Utilities ===
def _symbols(symbols, placeholder):
    return ", ".join(display_symbol(s, placeholder) for s in symbols) or "-"


def show_machine_summary(table, placeholder="_"):
    console.print("\n[bold cyan]== Machine loaded ==[/bold cyan]")
    summary = Table(show_header=False)
    summary.add_column("Field", style="bold")
    summary.add_column("Value")
    summary.add_row("States", escape(", ".join(table.states)))
    summary.add_row("Initial state", escape(table.initial_state))
    summary.add_row("Final state", escape(table.final_state))
    summary.add_row("Alphabet", escape(_symbols(table.alphabet, placeholder)))
    summary.add_row("Tape alphabet", escape(_symbols(table.tape_alphabet, placeholder)))
    summary.add_row("Transitions", str(len(table)))
    console.print(summary)


def show_result(result, final_state):
    console.print("======================================")
    console.print(f'Simulating input: "{escape(result.input)}"')
    console.print("Instantaneous descriptions per step:")
    for i, description in enumerate(result.trace):
        console.print(f"{i:3d}: {escape(description)}", highlight=False)

    if result.verdict == ACCEPTED:
        console.print(f"[green]>> Result: ACCEPTED (reached final state {escape(final_state)})[/green]")
    elif result.verdict == REJECTED:
        console.print("[yellow]>> Result: REJECTED (no applicable transition)[/yellow]")
    else:
        console.print(f"[red]>> Result: ABORTED ({result.reason}) after {result.steps} steps[/red]")
    console.print("======================================\n")


def build_parser():
    parser = argparse.ArgumentParser(description="Cached-register Turing machine simulator")
    parser.add_argument("--config", default=DEFAULT_MACHINE_PATH, help="Path to the YAML machine description")
    parser.add_argument("--runtime-config", default=None, help="Optional JSON file with runtime settings")
    parser.add_argument("--max-steps", type=int, default=None, help="Step limit before a run is aborted")
    parser.add_argument("--workers", type=int, default=None, help="Processes used to simulate the inputs")
    parser.add_argument("--log", action="store_true", help="Append results to the JSON lines log")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    overrides = {}
    if args.max_steps is not None:
        overrides["max_steps"] = args.max_steps
    if args.workers is not None:
        overrides["workers"] = args.workers

    try:
        config = load_config(args.runtime_config, overrides)
    except (OSError, ValueError, TypeError) as e:
        error_console.print(f"[red]Error loading runtime config: {escape(str(e))}[/red]")
        return 1

    try:
        desc = load_machine(args.config)
        table = TransitionTable.from_description(desc)
        machine = TuringMachine(table, max_steps=config["max_steps"], placeholder=config["blank_display"])
    except (MachineError, ValueError) as e:
        error_console.print(f"[red]Error loading machine description: {escape(str(e))}[/red]")
        return 1

    show_machine_summary(table, config["blank_display"])

    results = machine.run_many(desc.simulation_strings, workers=config["workers"])
    for result in results:
        show_result(result, table.final_state)

    if args.log or config["log_results"]:
        logger = JSONLogger(config["output_directory"], config["log_file_prefix"])
        logger.log_results(Path(args.config).stem, results)
        console.print(f"[green]Results appended to {escape(logger.current_log)}[/green]")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
