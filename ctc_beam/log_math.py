"""
Log-space probability arithmetic.

Probabilities are carried as natural logarithms. LOG_ZERO (-inf) stands for
"no probability mass recorded yet" and is the identity of log_sum_exp.
"""
import math

LOG_ZERO = float('-inf')


def log_sum_exp(a: float, b: float) -> float:
    """
    Numerically stable log(exp(a) + exp(b)) for two scalars.

    ln(a + b) = ln(a) + ln(1 + exp(ln(b) - ln(a))), factored around the larger term.

    Args:
        a: Log probability
        b: Log probability

    Returns:
        Log of the summed probabilities. LOG_ZERO when both inputs are LOG_ZERO.
    """
    if a == LOG_ZERO:
        return b
    if b == LOG_ZERO:
        return a
    if a > b:
        return a + math.log1p(math.exp(b - a))
    return b + math.log1p(math.exp(a - b))
