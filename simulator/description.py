from simulator.tape import BLANK

PLACEHOLDER = "_"


def display_symbol(sym, placeholder=PLACEHOLDER):
    return placeholder if sym == BLANK else sym


def render_description(tape, head, state, cache, placeholder=PLACEHOLDER):
    """Render one instantaneous description as ``alpha (q) beta``.

    The window spans every non-blank cell plus the head; an empty tape
    collapses it to the head cell alone.
    """
    bounds = tape.occupied_bounds()
    if bounds is None:
        low, high = head, head
    else:
        low, high = min(bounds[0], head), max(bounds[1], head)

    left = "".join(display_symbol(tape.read(i), placeholder) for i in range(low, head))
    right = "".join(display_symbol(tape.read(i), placeholder) for i in range(head, high + 1))

    return f"{left} ({state}) {right}    [mem={display_symbol(cache, placeholder)}]  head={head}"
