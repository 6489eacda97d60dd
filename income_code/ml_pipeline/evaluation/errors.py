class EvaluationError(Exception):
    """Base class for errors raised while evaluating a binary classifier."""


class UndefinedMetric(EvaluationError, ZeroDivisionError):
    """A requested ratio has a zero denominator (degenerate dataset or model state)."""


class InvalidScore(EvaluationError, ValueError):
    """A probability score falls outside [0, 1]."""
