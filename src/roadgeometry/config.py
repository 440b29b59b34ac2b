import sys
from dataclasses import dataclass


@dataclass(frozen=True)
class GeometryConfig:
    """Tunables for the polyline analysis functions."""

    # Maximum |slope| of the second regression line once the first is horizontal
    parallel_slope_threshold: float = 0.1
    # Regression divisors below this are treated as a vertical fit
    regression_epsilon: float = sys.float_info.epsilon
    # Degrees added beyond the observed longitude range of a regression line
    regression_margin: float = 0.00001


DEFAULT_CONFIG = GeometryConfig()
