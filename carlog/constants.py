"""Constants shared by the analysis modules."""

# The fuel gauge is read in twelfths of a full tank
GAUGE_SEGMENTS = 12
MIN_GAUGE_LEVEL = 1
MAX_GAUGE_LEVEL = GAUGE_SEGMENTS

# Tank capacity estimation
MIN_CAPACITY_SAMPLES = 3
MIN_PLAUSIBLE_CAPACITY_L = 20.0
MAX_PLAUSIBLE_CAPACITY_L = 150.0
