"""
Exceptions raised by the fraud view pipeline.
"""

from typing import Iterable


class FraudViewError(Exception):
    """Base class for pipeline errors."""


class GenerationError(FraudViewError, ValueError):
    """Invalid arguments passed to the data simulator."""


class UnknownCategoryError(FraudViewError, ValueError):
    """A categorical value outside the configured category set."""

    def __init__(self, unknown: Iterable[str], known: Iterable[str]):
        self.unknown = sorted(set(str(value) for value in unknown))
        self.known = list(known)
        super().__init__(
            f"Unknown category {', '.join(map(repr, self.unknown))}; "
            f"expected one of {self.known}"
        )


class DegenerateLabelError(FraudViewError, ValueError):
    """Training labels cannot produce a meaningful classifier."""


class ModelNotTrainedError(FraudViewError, RuntimeError):
    """Inference requested before the model was fitted."""
