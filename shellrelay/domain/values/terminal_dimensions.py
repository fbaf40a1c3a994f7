"""Terminal dimensions value object."""

from dataclasses import dataclass

# Business rules
MIN_COLS = 1
MAX_COLS = 1000
MIN_ROWS = 1
MAX_ROWS = 500
DEFAULT_COLS = 80
DEFAULT_ROWS = 24


@dataclass(frozen=True, slots=True)
class TerminalDimensions:
    """Terminal geometry in character cells (value object)."""

    cols: int
    rows: int

    def __post_init__(self) -> None:
        # bool is an int subclass but never a valid geometry
        if not isinstance(self.cols, int) or isinstance(self.cols, bool):
            raise ValueError(f"cols must be an integer, got {self.cols!r}")
        if not isinstance(self.rows, int) or isinstance(self.rows, bool):
            raise ValueError(f"rows must be an integer, got {self.rows!r}")
        if not MIN_COLS <= self.cols <= MAX_COLS:
            raise ValueError(f"cols must be between {MIN_COLS} and {MAX_COLS}")
        if not MIN_ROWS <= self.rows <= MAX_ROWS:
            raise ValueError(f"rows must be between {MIN_ROWS} and {MAX_ROWS}")

    @classmethod
    def default(cls) -> "TerminalDimensions":
        return cls(cols=DEFAULT_COLS, rows=DEFAULT_ROWS)

    @classmethod
    def clamped(cls, cols: int, rows: int) -> "TerminalDimensions":
        """Create dimensions, clamping values into the allowed range."""
        return cls(
            cols=max(MIN_COLS, min(int(cols), MAX_COLS)),
            rows=max(MIN_ROWS, min(int(rows), MAX_ROWS)),
        )

    def resize(self, cols: int, rows: int) -> "TerminalDimensions":
        """Return new dimensions (immutable update)."""
        return TerminalDimensions(cols=cols, rows=rows)
