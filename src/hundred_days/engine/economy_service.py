"""Economy service: the engine surface the view layer talks to.

Responsibilities:
- Active actions by item and index, with the activation amount
- Day passes (day counter + every passive action)
- Net worth by liquidating a scratch copy of the state
- Global actions

Engine errors never escape: they are logged and returned as the result
message, and the state is left as it was. All methods operate on the
GameState held by the service. No I/O.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from hundred_days.loaders.game_config_loader import GameConfig

from hundred_days.engine.activation import activate, activate_passive, max_activate
from hundred_days.engine.errors import EngineError, InvalidMultiplier
from hundred_days.models.actions import Action, Deconstruct, GlobalAction, action_name
from hundred_days.models.game_state import GameState
from hundred_days.models.items import Item
from hundred_days.util.constants import DEFAULT_ACTIVATION_AMOUNT
from hundred_days.util.events import ActionResolved, DayPassed, EventBus, GameEnded
from hundred_days.util.types import format_days

log = logging.getLogger(__name__)


class EconomyService:
    """Service for all economic state transitions of one game.

    Args:
        game: The live game state. Mutated in place.
        event_bus: Event bus notified of every result.
        game_config: Engine tunables (defaults when omitted).
    """

    def __init__(self, game: GameState, event_bus: EventBus,
                 game_config: GameConfig | None = None) -> None:
        self._game = game
        self._events = event_bus

        if game_config is not None:
            self._default_amount = game_config.default_activation_amount
            self._scale_by_owner = game_config.scale_production_by_owner
        else:
            self._default_amount = DEFAULT_ACTIVATION_AMOUNT
            self._scale_by_owner = False

    # -- Read access -----------------------------------------------------

    @property
    def game(self) -> GameState:
        return self._game

    def get_item(self, name: str) -> Optional[Item]:
        """Look up an item by name."""
        return self._game.items.get(name)

    def max_activate(self, action: Action, item_name: str) -> int:
        """Largest affordable multiplier, 0 when a referenced item is missing."""
        try:
            return max_activate(action, item_name, self._game)
        except EngineError as exc:
            log.warning("max_activate %s on %s: %s", action_name(action), item_name, exc)
            return 0

    def max_activate_action(self, item_name: str, index: int) -> int:
        """``max_activate`` for the item's active action at *index*."""
        action = self._active_action(item_name, index)
        if action is None:
            return 0
        return self.max_activate(action, item_name)

    # -- Active actions --------------------------------------------------

    def activate(self, action: Action, item_name: str, multiplier: int | None = None) -> str:
        """Activate *action* on *item_name* and return the result message.

        The whole batch is applied or nothing is; on failure the message
        says why (for unaffordable batches: the affordable maximum).
        """
        if multiplier is None:
            multiplier = self._default_amount
        name = action_name(action)
        try:
            message = activate(action, item_name, self._game, multiplier)
        except EngineError as exc:
            message = str(exc)
            log.info("%s on %s x%d rejected: %s", name, item_name, multiplier, message)
            self._events.emit(ActionResolved(item_name, name, multiplier, message, False))
            return message

        self._events.emit(ActionResolved(item_name, name, multiplier, message, True))
        return message

    def activate_action(self, item_name: str, index: int, multiplier: int | None = None) -> str:
        """Activate the item's active action at *index*."""
        if multiplier is None:
            multiplier = self._default_amount
        action = self._active_action(item_name, index)
        if action is None:
            message = "Could not find action"
            self._events.emit(ActionResolved(item_name, "", multiplier, message, False))
            return message
        return self.activate(action, item_name, multiplier)

    def _active_action(self, item_name: str, index: int) -> Optional[Action]:
        item = self._game.items.get(item_name)
        if item is None or not 0 <= index < len(item.active_actions):
            return None
        return item.active_actions[index]

    # -- Day pass --------------------------------------------------------

    def pass_day(self, amount: int = 1) -> str:
        """Advance the clock by *amount* days and fire every passive action.

        The day counter always drops by exactly *amount*. Items are
        snapshotted first, since passive actions change other items.
        A passive action that fails (missing item) is skipped and
        reported; reductions are clamped at zero rather than rejected.
        """
        if amount < 0:
            message = str(InvalidMultiplier(amount))
            log.info("pass_day rejected: %s", message)
            return message

        was_ended = self._game.is_ended
        self._game.day -= amount

        snapshot = [
            (item.name, item.amount, tuple(item.passive_actions))
            for item in self._game
        ]
        lines = [f"Passed {format_days(amount)}"]
        for item_name, owned, actions in snapshot:
            multiplier = amount * max(0, owned) if self._scale_by_owner else amount
            if multiplier == 0:
                continue
            for action in actions:
                try:
                    lines.append(activate_passive(action, item_name, self._game, multiplier))
                except EngineError as exc:
                    log.warning("Passive %s on %s skipped: %s", action_name(action), item_name, exc)
                    lines.append(f"{item_name}: {exc}")

        message = "\n".join(lines)
        log.info("Passed %s, %d remaining", format_days(amount), self._game.day)
        self._events.emit(DayPassed(amount, self._game.day, message))
        if self._game.is_ended and not was_ended:
            log.info("Game ended on day %d", self._game.day)
            self._events.emit(GameEnded(self._game.day))
        return message

    # -- Valuation -------------------------------------------------------

    def net_worth(self) -> int:
        """Currency the player would hold after selling everything sellable.

        Liquidates a clone: every item with a Sell or Deconstruct action
        is emptied through its first such action. Passes repeat while
        anything was liquidated, so deconstruction gains that land on
        already emptied items are liquidated too. Bounded by the number
        of items to stop on deconstruction cycles. An item that
        deconstructs into itself is never emptied and is left unvalued.
        """
        cash_game = self._game.clone()
        passes = len(cash_game.items) + 1

        for _ in range(passes):
            liquidated = False
            for item in cash_game:
                action = item.liquidation_action()
                if action is None or item.amount <= 0:
                    continue
                if isinstance(action, Deconstruct) and item.name in action.item_gain:
                    log.warning("Cannot liquidate %s: deconstruction returns the item itself", item.name)
                    continue
                try:
                    activate(action, item.name, cash_game, item.amount)
                except EngineError as exc:
                    log.warning("Cannot liquidate %s: %s", item.name, exc)
                    continue
                liquidated = True
            if not liquidated:
                break
        else:
            log.warning("Liquidation still changing after %d passes", passes)

        return cash_game.currency

    # -- Global actions --------------------------------------------------

    def activate_global(self, action: GlobalAction | str, amount: int | None = None) -> str:
        """Run a global action such as Pass Day."""
        if not isinstance(action, GlobalAction):
            try:
                action = GlobalAction(action)
            except ValueError:
                return f"Unknown global action {action!r}"

        if action not in self._game.global_actions:
            return "Could not find action"
        if self._game.is_ended:
            return "The game has ended"

        if amount is None:
            amount = self._default_amount
        if action is GlobalAction.PASS_DAY:
            return self.pass_day(amount)
        raise TypeError(f"Unhandled global action: {action!r}")
