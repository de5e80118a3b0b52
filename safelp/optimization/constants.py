"""Centralized constants for the model views and their configuration."""

# ============================================================================
# FILE LOADING
# ============================================================================

#: Instance file suffixes handed to the engine; anything else is rejected
#: before the engine sees the path
LP_FILE_SUFFIXES = (".lp", ".mps")


# ============================================================================
# RESULT REPORTING
# ============================================================================

#: Values whose magnitude is at or below this are reported as zero in
#: summaries and frames (engine feasibility tolerances are of this order)
SOLUTION_TOLERANCE = 1e-9


# ============================================================================
# PRESET LIMITS
# ============================================================================

#: Time limit (seconds) of the "fast" preset
FAST_TIME_LIMIT_SECONDS = 30.0

#: Feasibility/optimality tolerance of the "careful" preset
CAREFUL_TOLERANCE = 1e-9
