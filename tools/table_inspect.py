import argparse

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from config.machine_loader import DEFAULT_MACHINE_PATH, load_machine
from simulator.description import display_symbol
from simulator.transition_table import TransitionTable

console = Console(soft_wrap=True)


def transition_rows(table, placeholder="_"):
    """One row of display strings per rule, in declaration order."""
    rows = []
    for tr in table:
        rows.append([
            tr.from_state,
            display_symbol(tr.from_cache, placeholder),
            display_symbol(tr.read_symbol, placeholder),
            tr.to_state,
            display_symbol(tr.to_cache, placeholder),
            display_symbol(tr.write_symbol, placeholder),
            tr.move,
        ])
    return rows


def unreachable_from_final(table):
    """Rules leaving the final state; the machine halts before they can fire."""
    return [tr for tr in table if tr.from_state == table.final_state]


def latex_table(table, placeholder="_"):
    lines = [r"\begin{array}{ccc|cccc}"]
    lines.append(r"q & \text{mem} & \text{read} & q' & \text{mem}' & \text{write} & \text{move} \\ \hline")
    for row in transition_rows(table, placeholder):
        lines.append(" & ".join(f"\\text{{{cell}}}" for cell in row) + r" \\")
    lines.append(r"\end{array}")
    return "\n".join(lines)


def pretty_print_table(table, placeholder="_", latex=False):
    # === Terminal Human-Readable Table ===
    view = Table(title="Transition Table", show_header=True, header_style="bold magenta")
    for header in ["State", "Mem", "Read", "Next", "Mem'", "Write", "Move"]:
        view.add_column(header, justify="center")
    for row in transition_rows(table, placeholder):
        view.add_row(*(escape(cell) for cell in row))
    console.print(view)

    unreachable = unreachable_from_final(table)
    if unreachable:
        console.print(
            f"[yellow]Warning: {len(unreachable)} transition(s) leave final state "
            f"{escape(table.final_state)} and can never fire.[/yellow]"
        )

    # === LaTeX Table Output ===
    if latex:
        console.print("\n=== LaTeX Table ===")
        console.print(latex_table(table, placeholder), markup=False, highlight=False)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Transition Table Inspector")
    parser.add_argument("--config", default=DEFAULT_MACHINE_PATH, help="Path to the YAML machine description")
    parser.add_argument("--latex", action="store_true", help="Also print the table as a LaTeX array")
    args = parser.parse_args(argv)

    table = TransitionTable.from_description(load_machine(args.config))
    console.print(f"[INFO] Machine {escape(args.config)}")
    console.print(f"  States: {len(table.states)}")
    console.print(f"  Transitions: {len(table)}")
    pretty_print_table(table, latex=args.latex)


if __name__ == "__main__":
    main()
