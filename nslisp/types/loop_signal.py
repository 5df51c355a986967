from nslisp import LispValue


class LoopSignal:
    """Result of `break`/`recur`, consumed once by the loop trampoline."""

    __slots__ = ("values",)

    def __init__(self, values: list[LispValue]):
        self.values = values

    def __repr__(self):
        return f"{type(self).__name__}({self.values!r})"


class Stop(LoopSignal):
    """Produced by (break value): leave the loop with `value`."""


class Continue(LoopSignal):
    """Produced by (recur args...): run the body again with new args."""
