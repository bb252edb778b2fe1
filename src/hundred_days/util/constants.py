"""Engine constants: activation limits and defaults.

Tunable values live in GameConfig; these are fixed by the engine itself.
"""

# -- Activation ----------------------------------------------------------

MAX_MULTIPLIER: int = 2**31 - 1
"""Largest activation count an action can report (unbounded production)."""

DEFAULT_ACTIVATION_AMOUNT: int = 1
"""Batch size used when the caller does not pick one."""

# -- History -------------------------------------------------------------

DEFAULT_HISTORY_LIMIT: int = 3
"""Number of result messages kept for display."""

# -- Paths ---------------------------------------------------------------

DEFAULT_DATA_PATH: str = "config/hundred_days.yaml"
DEFAULT_GAME_CONFIG_PATH: str = "config/game.yaml"
