"""Exception classes for the hcvcoloc analysis core."""


class AnalysisError(Exception):
    """Base exception for all analysis errors."""


class EmptyInputError(AnalysisError):
    """Raised when a sample array is empty or carries no usable signal."""

    def __init__(self, what: str | None = None) -> None:
        msg = f"Empty input: {what}" if what else "Empty input"
        super().__init__(msg)
        self.what = what


class NoPeakFoundError(AnalysisError):
    """Raised when the peak search exhausts a profile without a local maximum."""

    def __init__(self, length: int | None = None) -> None:
        if length is not None:
            msg = f"No peak found in profile of length {length}"
        else:
            msg = "No peak found"
        super().__init__(msg)
        self.length = length


class ShapeMismatchError(AnalysisError):
    """Raised when two operands expected to share a grid do not."""

    def __init__(self, left: object = None, right: object = None) -> None:
        if left is not None and right is not None:
            msg = f"Shape mismatch: {left} vs {right}"
        else:
            msg = "Shape mismatch"
        super().__init__(msg)
        self.left = left
        self.right = right


class InsufficientDataError(AnalysisError):
    """Raised when statistics are requested over an empty or too-small population."""

    def __init__(self, population: str | None = None, detail: str | None = None) -> None:
        if population and detail:
            msg = f"Insufficient data for {population}: {detail}"
        elif population:
            msg = f"Insufficient data for {population}"
        else:
            msg = detail or "Insufficient data"
        super().__init__(msg)
        self.population = population


class ConfigError(AnalysisError):
    """Raised when an analysis configuration is invalid."""
