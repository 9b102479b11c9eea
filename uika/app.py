import logging
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Tuple, Union

from . import store
from .countdown import CountdownList
from .errors import StoreError
from .state import AppState, CreatingCountdown, ViewingCountdowns, WizardStep, initial_state, validate_step

logger = logging.getLogger(__name__)


class Action(Enum):
    QUIT = "quit"
    NEXT = "next"
    PREVIOUS = "previous"
    NEW = "new"
    CANCEL = "cancel"
    CONFIRM = "confirm"
    BACKSPACE = "backspace"
    TEXT = "text"


Event = Tuple[Action, str]
SaveFunc = Callable[[CountdownList, Union[str, Path]], None]


class Application:
    """Owns the countdown list and the current state; the run loop mutates both."""

    def __init__(
        self,
        countdowns: CountdownList,
        path: Optional[Union[str, Path]] = None,
        save: SaveFunc = store.save,
    ) -> None:
        self.countdowns = countdowns
        self.path = Path(path) if path is not None else None
        self._save = save
        self.state: AppState = initial_state(countdowns)
        self.exit = False
        self.message = ""

    def handle(self, action: Action, text: str = "") -> None:
        if action is Action.QUIT:
            self.exit = True
            return
        if isinstance(self.state, CreatingCountdown):
            self._handle_creating(self.state, action, text)
        else:
            self._handle_viewing(action)

    def _handle_viewing(self, action: Action) -> None:
        if action is Action.NEXT:
            self.countdowns.select_next()
        elif action is Action.PREVIOUS:
            self.countdowns.select_previous()
        elif action is Action.NEW:
            self.message = ""
            self.state = CreatingCountdown(WizardStep.NAME)

    def _handle_creating(self, state: CreatingCountdown, action: Action, text: str) -> None:
        draft = state.draft
        if action is Action.CANCEL:
            self.state = ViewingCountdowns()
        elif action is Action.TEXT and text:
            self.state = CreatingCountdown(state.step, draft.typed(text))
        elif action is Action.BACKSPACE:
            self.state = CreatingCountdown(state.step, draft.backspaced())
        elif action is Action.CONFIRM:
            error = validate_step(state.step, draft.buffer)
            if error:
                self.state = CreatingCountdown(state.step, draft.failed(error))
                return
            draft = draft.accepted(state.step)
            next_step = state.step.next()
            if next_step is not None:
                self.state = CreatingCountdown(next_step, draft)
                return
            countdown = draft.build()
            self.countdowns.append(countdown)
            self.state = ViewingCountdowns()
            logger.info("created countdown %r for %s", countdown.name, countdown.target_time.isoformat())
            self._persist()

    def _persist(self) -> None:
        if self.path is None:
            return
        try:
            self._save(self.countdowns, self.path)
        except StoreError as exc:
            logger.error("saving countdowns failed: %s", exc)
            self.message = f"Save failed: {exc}"
        else:
            self.message = f"Saved to {self.path}"

    def dispatch(self, action: Action, text: str = "") -> None:
        try:
            self.handle(action, text)
        except Exception as exc:
            logger.exception("handling %s failed", action.value)
            self.message = f"Error: {exc}"

    def run(self, render: Callable[["Application"], None], poll: Callable[[], Optional[Event]]) -> None:
        while not self.exit:
            render(self)
            event = poll()
            if event is None:
                continue
            action, text = event
            self.dispatch(action, text)
