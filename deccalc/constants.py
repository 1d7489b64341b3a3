"""Engine constants for deccalc.

Centralizes the default scale and the patterns shared by the pipeline stages.
"""

# Fractional digits kept when no scale is configured
DEFAULT_SCALE = 15

# Environment variable consulted by CalculatorConfig.from_env()
SCALE_ENV_VAR = "DECCALC_SCALE"

# Significant digits kept when a fractional power is approximated with floats.
# 14 digits absorbs the last-bit noise of float pow (81 ** 0.75 -> 27).
FLOAT_SIGNIFICANT_DIGITS = 14

# Signed plain decimal: the only shape a final result may take
NUMBER_PATTERN = r"-?\d+(?:\.\d+)?"

# Scientific literal, e.g. 1.2E-3 (mantissa is always unsigned here)
SCIENTIFIC_PATTERN = r"(\d+(?:\.\d+)?)[eE]([-+]?\d+)"

# Comparison operators; the three equality spellings are interchangeable
COMPARISON_PATTERN = r"(>=|<=|<|>|={1,3})"

# Supported function names
FUNCTIONS = ("abs", "min", "max")
