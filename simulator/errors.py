class MachineError(Exception):
    """Base class for machine description and table build failures."""


class ConfigLoadError(MachineError):
    """The machine description document could not be read."""


class ConfigParseError(MachineError, ValueError):
    """The machine description document is malformed."""


class AmbiguousTransitionError(MachineError):
    def __init__(self, key):
        state, cache, symbol = key
        super().__init__(
            f"Duplicate transition for state={state!r}, cache={cache!r}, symbol={symbol!r}"
        )
        self.key = key


class UndeclaredStateError(MachineError):
    pass


class UndeclaredSymbolError(MachineError):
    pass


class InvalidMoveError(MachineError):
    pass
