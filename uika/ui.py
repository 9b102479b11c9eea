import curses
import sys
from datetime import datetime
from typing import Dict, List, Optional, Tuple, Union

from .app import Action, Application, Event
from .colors import nearest_curses_color
from .config import DEFAULT_POLL_INTERVAL_MS
from .countdown import Countdown, CountdownList
from .state import STEP_HINTS, AppState, CreatingCountdown, WizardStep
from .timecalc import format_remaining, now_local

TITLE = " Uika Countdown App "
VIEW_HINTS = " Prev <Left> Next <Right> New <n> Quit <q> "
CREATE_HINTS = " Confirm <Enter> Cancel <Esc> Quit <Ctrl-D> "
MIN_ROWS = 8
MIN_COLS = 30
ESC_DELAY_MS = 25
CTRL_D = "\x04"

VIEW_KEYS: Dict[str, Action] = {
    "q": Action.QUIT,
    "n": Action.NEW,
    "l": Action.NEXT,
    "h": Action.PREVIOUS,
    "\t": Action.NEXT,
}


def decode_key(key: Union[int, str], state: AppState) -> Optional[Event]:
    """Translate a curses key into an application event, or None to ignore it."""
    creating = isinstance(state, CreatingCountdown)
    if isinstance(key, int):
        if key in (curses.KEY_ENTER, 10, 13):
            return Action.CONFIRM, ""
        if key in (curses.KEY_BACKSPACE, 127, 8):
            return Action.BACKSPACE, ""
        if creating:
            return None
        if key == curses.KEY_RIGHT:
            return Action.NEXT, ""
        if key in (curses.KEY_LEFT, curses.KEY_BTAB):
            return Action.PREVIOUS, ""
        return None

    if key == CTRL_D:
        return Action.QUIT, ""
    if key in ("\n", "\r"):
        return Action.CONFIRM, ""
    if key == "\x1b":
        return Action.CANCEL, ""
    if key in ("\b", "\x7f"):
        return Action.BACKSPACE, ""
    if creating:
        if key.isprintable():
            return Action.TEXT, key
        return None
    action = VIEW_KEYS.get(key.lower())
    if action is None:
        return None
    return action, ""


def panel_lines(countdowns: CountdownList, now: datetime) -> List[str]:
    current = countdowns.selected()
    if current is None:
        return ["No countdowns yet.", "Press n to create one."]
    remaining = current.remaining_seconds(now)
    if remaining <= 0:
        first = f"{current.name} is DONE ({-remaining} seconds ago)"
    else:
        first = f"{remaining} seconds till {current.name}"
    return [first, f"{format_remaining(remaining)} | {current.target_time.strftime('%Y-%m-%d %H:%M:%S %z')}"]


def form_lines(state: CreatingCountdown) -> List[Tuple[str, bool]]:
    lines: List[Tuple[str, bool]] = [("NEW COUNTDOWN", False), ("", False)]
    for step in WizardStep:
        active = step is state.step
        if active:
            value = state.draft.buffer + "_"
        else:
            value = state.draft.value(step)
        prefix = ">" if active else " "
        lines.append((f"{prefix} {step.label + ':':<18} {value}", active))
    lines.append(("", False))
    lines.append((f"  {STEP_HINTS[state.step]}", False))
    if state.draft.error:
        lines.append(("", False))
        lines.append((f"Error: {state.draft.error}", False))
    return lines


class Palette:
    """Lazily allocates curses color pairs for countdown colors."""

    def __init__(self) -> None:
        self.enabled = False
        self.pairs: Dict[Tuple[int, int], int] = {}
        if not curses.has_colors():
            return
        try:
            curses.start_color()
            curses.use_default_colors()
        except curses.error:
            return
        self.enabled = True

    def attr_for(self, countdown: Countdown) -> int:
        if not self.enabled:
            return curses.A_REVERSE
        fg = nearest_curses_color(countdown.foreground_color)
        bg = nearest_curses_color(countdown.background_color)
        if fg == -1 and bg == -1:
            return curses.A_REVERSE
        key = (fg, bg)
        if key not in self.pairs:
            number = len(self.pairs) + 1
            if number >= curses.COLOR_PAIRS:
                return curses.A_REVERSE
            try:
                curses.init_pair(number, fg, bg)
            except curses.error:
                return curses.A_REVERSE
            self.pairs[key] = number
        return curses.color_pair(self.pairs[key])


def _put(stdscr, y: int, x: int, text: str, attr: int = 0) -> None:
    try:
        stdscr.addstr(y, x, text, attr)
    except curses.error:
        pass


def _draw_frame(stdscr, rows: int, cols: int, hints: str) -> None:
    horiz = "-" * (cols - 2)
    _put(stdscr, 0, 0, "+" + horiz + "+")
    for y in range(1, rows - 1):
        _put(stdscr, y, 0, "|")
        _put(stdscr, y, cols - 1, "|")
    _put(stdscr, rows - 1, 0, "+" + horiz + "+")
    title = TITLE[: cols - 4]
    _put(stdscr, 0, max(1, (cols - len(title)) // 2), title, curses.A_BOLD)
    hints = hints[: cols - 4]
    _put(stdscr, rows - 1, max(1, (cols - len(hints)) // 2), hints)


def _draw_tabs(stdscr, y: int, cols: int, countdowns: CountdownList, palette: Palette) -> None:
    x = 2
    right = cols - 2
    for idx, countdown in enumerate(countdowns):
        label = f" {countdown.name} "
        if x + len(label) > right:
            _put(stdscr, y, max(2, right - 3), "...")
            break
        if idx == countdowns.selected_index:
            attr = palette.attr_for(countdown) | curses.A_BOLD
        else:
            attr = curses.A_DIM
        _put(stdscr, y, x, label, attr)
        x += len(label)
        if x < right:
            _put(stdscr, y, x, "|")
        x += 1


def _draw_centered(stdscr, y: int, cols: int, text: str, attr: int = 0) -> None:
    text = text[: max(0, cols - 4)]
    _put(stdscr, y, max(2, (cols - len(text)) // 2), text, attr)


def draw(stdscr, app: Application, palette: Palette, now: Optional[datetime] = None) -> None:
    if now is None:
        now = now_local()
    rows, cols = stdscr.getmaxyx()
    stdscr.erase()
    state = app.state

    if rows < MIN_ROWS or cols < MIN_COLS:
        line = panel_lines(app.countdowns, now)[0]
        _put(stdscr, 0, 0, line[: max(0, cols - 1)])
        stdscr.refresh()
        return

    if isinstance(state, CreatingCountdown):
        _draw_frame(stdscr, rows, cols, CREATE_HINTS)
        for i, (line, active) in enumerate(form_lines(state)):
            row = 2 + i
            if row >= rows - 2:
                break
            _put(stdscr, row, 2, line[: cols - 4], curses.A_BOLD if active else 0)
    else:
        _draw_frame(stdscr, rows, cols, VIEW_HINTS)
        _draw_tabs(stdscr, 2, cols, app.countdowns, palette)
        middle = max(4, rows // 2 - 1)
        lines = panel_lines(app.countdowns, now)
        _draw_centered(stdscr, middle, cols, lines[0], curses.A_BOLD)
        if len(lines) > 1:
            _draw_centered(stdscr, middle + 1, cols, lines[1], curses.A_DIM)

    if app.message:
        _put(stdscr, rows - 2, 2, app.message[: cols - 4])
    stdscr.refresh()


def run(app: Application, poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS) -> None:
    stdscr = curses.initscr()
    sys.stdout.write("\x1b[?1049h")
    sys.stdout.flush()
    curses.noecho()
    curses.cbreak()
    stdscr.keypad(True)
    try:
        curses.curs_set(0)
    except curses.error:
        pass

    try:
        curses.set_escdelay(ESC_DELAY_MS)
        stdscr.timeout(poll_interval_ms)
        palette = Palette()

        def render(current: Application) -> None:
            draw(stdscr, current, palette)

        def poll() -> Optional[Event]:
            try:
                key = stdscr.get_wch()
            except curses.error:
                return None
            return decode_key(key, app.state)

        app.run(render, poll)
    finally:
        curses.nocbreak()
        stdscr.keypad(False)
        curses.echo()
        curses.endwin()
        sys.stdout.write("\x1b[?1049l")
        sys.stdout.flush()
