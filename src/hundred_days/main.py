"""Game entry point.

Initializes all components and reports the opening position:
1. Load configuration (engine tunables, game data)
2. Create the economy service and message history
3. Wire events into the history
4. Print the opening summary (day, currency, items, net worth)

``setup()`` returns the wired services for a view layer to drive;
``main()`` only prints the opening summary.

Usage:
    python -m hundred_days.main [--data <path>] [--config <path>]
    # or via entry point:
    hundred-days
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import Optional

from hundred_days.engine.economy_service import EconomyService
from hundred_days.loaders.game_config_loader import GameConfig, load_game_config
from hundred_days.loaders.item_loader import ConfigError
from hundred_days.loaders.state_loader import load_state
from hundred_days.models.game_state import GameState
from hundred_days.models.history import MessageHistory
from hundred_days.models.items import ItemCategory
from hundred_days.util.constants import DEFAULT_GAME_CONFIG_PATH
from hundred_days.util.events import ActionResolved, DayPassed, EventBus, GameEnded

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Container for all loaded configuration
# ---------------------------------------------------------------------------


@dataclass
class Configuration:
    """Holds all data loaded from config files."""

    game: GameConfig = field(default_factory=GameConfig)
    state: GameState = field(default_factory=GameState)


# ---------------------------------------------------------------------------
# Container for all services
# ---------------------------------------------------------------------------


@dataclass
class Services:
    """Holds references to all engine services."""

    game_config: Optional[GameConfig] = None
    event_bus: Optional[EventBus] = None
    economy: Optional[EconomyService] = None
    history: Optional[MessageHistory] = None


# ===================================================================
# 1. Load configuration
# ===================================================================


def load_configuration(config_path: str = DEFAULT_GAME_CONFIG_PATH,
                       data_path: str = "") -> Configuration:
    """Load engine tunables and the starting game state.

    Args:
        config_path: Path to the engine config YAML.
        data_path: Path to the game data document (default: from config).

    Raises:
        ConfigError: The game data is invalid.
    """
    log.info("Loading configuration …")

    game_cfg = load_game_config(config_path)
    if not data_path:
        data_path = game_cfg.data_path

    state = load_state(data_path)
    log.info("  items:        %d loaded from %s", len(state.items), data_path)
    log.info("  industries:   %s", ", ".join(state.industries) or "none")

    return Configuration(game=game_cfg, state=state)


# ===================================================================
# 2. Create services and wire events
# ===================================================================


def create_services(config: Configuration) -> Services:
    """Instantiate the economy service and the message history."""
    event_bus = EventBus()
    economy = EconomyService(config.state, event_bus, config.game)
    history = MessageHistory(config.game.history_limit)
    return Services(game_config=config.game, event_bus=event_bus,
                    economy=economy, history=history)


def wire_events(services: Services) -> None:
    """Feed every action and day result into the message history."""
    history = services.history
    bus = services.event_bus

    bus.on(ActionResolved, lambda e: history.add(e.message, max(e.multiplier, 1)))
    bus.on(DayPassed, lambda e: history.add(e.message, max(e.days, 1)))
    bus.on(GameEnded, lambda e: history.add("The game has ended", 1))


def setup(config_path: str = DEFAULT_GAME_CONFIG_PATH, data_path: str = "") -> Services:
    """Load everything and return ready, wired services."""
    config = load_configuration(config_path=config_path, data_path=data_path)
    services = create_services(config)
    wire_events(services)
    return services


# ===================================================================
# 3. Opening summary
# ===================================================================


def summary(services: Services) -> str:
    """Text overview of the current position."""
    game = services.economy.game
    lines = [
        f"Day {game.day} of {game.starting_day}",
        f"$ {game.currency}",
        f"Net worth: {services.economy.net_worth()}",
    ]
    for category in ItemCategory:
        items = game.items_by_category(category)
        if items:
            lines.append(f"{category.value}s:")
            lines.extend(f"  {item.name}: {item.amount}" for item in items)
    return "\n".join(lines)


def _arg(flag: str) -> str:
    """Value following *flag* on the command line, or ''."""
    if flag not in sys.argv:
        return ""
    idx = sys.argv.index(flag)
    if idx + 1 >= len(sys.argv):
        print(f"Error: {flag} requires an argument", file=sys.stderr)
        sys.exit(1)
    return sys.argv[idx + 1]


def main() -> None:
    """Entry point.

    Supports command-line arguments:
        --data <path>    Game data document (default: from game config)
        --config <path>  Engine config YAML (default: config/game.yaml)
    """
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    log.info("=== Hundred Days starting ===")

    try:
        services = setup(config_path=_arg("--config") or DEFAULT_GAME_CONFIG_PATH,
                         data_path=_arg("--data"))
    except (ConfigError, FileNotFoundError) as exc:
        log.error("Cannot start: %s", exc)
        sys.exit(1)

    print(summary(services))


if __name__ == "__main__":
    main()
