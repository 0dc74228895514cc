import math

import numpy as np

# Regression outputs carry float noise (75.49999999999997 for 75.5);
# values are snapped to this many decimals before rounding.
FLOAT_NOISE_DECIMALS = 9

def round_half_up(value: float) -> int:
    # .5 always rounds towards +inf, unlike round()
    return int(math.floor(round(value, FLOAT_NOISE_DECIMALS) + 0.5))

def round_half_up_to(value: float, digits: int) -> float:
    scale = 10 ** digits
    return round_half_up(value * scale) / scale

def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))

def round_half_up_array(values) -> np.ndarray:
    snapped = np.round(np.asarray(values, dtype=float), FLOAT_NOISE_DECIMALS)
    return np.floor(snapped + 0.5)
