"""Game configuration: loads engine tunables from config/game.yaml.

Provides a single ``GameConfig`` dataclass that is loaded once at startup
and then passed to the services that need it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

from hundred_days.util.constants import (
    DEFAULT_ACTIVATION_AMOUNT,
    DEFAULT_DATA_PATH,
    DEFAULT_GAME_CONFIG_PATH,
    DEFAULT_HISTORY_LIMIT,
)

log = logging.getLogger(__name__)


@dataclass
class GameConfig:
    """All tunable engine settings.

    Loaded from ``config/game.yaml``.  Every field has a default so the
    game can start even without the file.
    """

    # -- Data --------------------------------------------------------
    data_path: str = DEFAULT_DATA_PATH

    # -- Activation --------------------------------------------------
    default_activation_amount: int = DEFAULT_ACTIVATION_AMOUNT

    # -- Day pass ----------------------------------------------------
    # When set, passive actions fire once per owned unit of their item.
    scale_production_by_owner: bool = False

    # -- Display -----------------------------------------------------
    history_limit: int = DEFAULT_HISTORY_LIMIT


def load_game_config(path: str | Path = DEFAULT_GAME_CONFIG_PATH) -> GameConfig:
    """Load engine configuration from a YAML file.

    Missing keys fall back to dataclass defaults, unknown keys are
    ignored.  If the file does not exist, a warning is logged and pure
    defaults are returned.
    """
    p = Path(path)
    if not p.exists():
        log.warning("Game config not found at %s, using defaults", p)
        return GameConfig()

    with p.open() as f:
        raw = yaml.safe_load(f) or {}

    log.info("Loaded game config from %s (%d keys)", p, len(raw))

    unknown = sorted(k for k in raw if k not in GameConfig.__dataclass_fields__)
    if unknown:
        log.warning("Ignoring unknown game config keys: %s", ", ".join(unknown))

    return GameConfig(**{
        k: v for k, v in raw.items()
        if k in GameConfig.__dataclass_fields__
    })
