BLANK = ""


class Tape:
    """Bi-infinite tape. Only non-blank cells are stored."""

    def __init__(self, cells=None):
        self.cells = {}
        if cells:
            for pos, sym in cells.items():
                self.write(pos, sym)

    @classmethod
    def from_string(cls, input_string):
        return cls(dict(enumerate(input_string)))

    def read(self, pos):
        return self.cells.get(pos, BLANK)

    def write(self, pos, sym):
        if sym == BLANK:
            self.cells.pop(pos, None)
        else:
            self.cells[pos] = sym

    def occupied_bounds(self):
        if not self.cells:
            return None
        return min(self.cells), max(self.cells)

    def snapshot(self):
        return dict(self.cells)

    def __len__(self):
        return len(self.cells)
