"""Application states: browsing the countdown tabs or running the creation wizard."""
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Optional, Union

from .colors import parse_optional_color
from .countdown import Countdown, CountdownList
from .timecalc import parse_timestamp


class WizardStep(Enum):
    NAME = "name"
    BACKGROUND_COLOR = "background_color"
    FOREGROUND_COLOR = "foreground_color"
    DATE_TIME = "date_time"

    @property
    def label(self) -> str:
        return STEP_LABELS[self]

    def next(self) -> Optional["WizardStep"]:
        steps = list(WizardStep)
        idx = steps.index(self)
        if idx + 1 < len(steps):
            return steps[idx + 1]
        return None


STEP_LABELS: Dict[WizardStep, str] = {
    WizardStep.NAME: "Name",
    WizardStep.BACKGROUND_COLOR: "Background color",
    WizardStep.FOREGROUND_COLOR: "Foreground color",
    WizardStep.DATE_TIME: "Date/time",
}

STEP_HINTS: Dict[WizardStep, str] = {
    WizardStep.NAME: "any text",
    WizardStep.BACKGROUND_COLOR: "RRGGBB or color name, empty for default",
    WizardStep.FOREGROUND_COLOR: "RRGGBB or color name, empty for default",
    WizardStep.DATE_TIME: "YYYY-MM-DDTHH:MM[:SS][+HH:MM]",
}


def validate_step(step: WizardStep, text: str) -> Optional[str]:
    """Return an error message for ``text`` entered at ``step``, or None."""
    if step is WizardStep.NAME:
        if not text.strip():
            return "Name must not be empty."
        return None
    if step in (WizardStep.BACKGROUND_COLOR, WizardStep.FOREGROUND_COLOR):
        try:
            parse_optional_color(text)
        except ValueError as exc:
            return str(exc)
        return None
    try:
        parse_timestamp(text)
    except ValueError:
        return f"Invalid date/time {text!r}."
    return None


@dataclass(frozen=True)
class Draft:
    values: Dict[WizardStep, str] = field(default_factory=dict)
    buffer: str = ""
    error: str = ""

    def value(self, step: WizardStep) -> str:
        return self.values.get(step, "")

    def typed(self, text: str) -> "Draft":
        return replace(self, buffer=self.buffer + text, error="")

    def backspaced(self) -> "Draft":
        return replace(self, buffer=self.buffer[:-1], error="")

    def failed(self, error: str) -> "Draft":
        return replace(self, error=error)

    def accepted(self, step: WizardStep) -> "Draft":
        values = dict(self.values)
        values[step] = self.buffer
        return Draft(values=values)

    def build(self) -> Countdown:
        """Turn the collected fields into a Countdown; raises ValueError if invalid."""
        for step in WizardStep:
            error = validate_step(step, self.value(step))
            if error:
                raise ValueError(f"{step.label}: {error}")
        return Countdown(
            name=self.value(WizardStep.NAME).strip(),
            target_time=parse_timestamp(self.value(WizardStep.DATE_TIME)),
            background_color=parse_optional_color(self.value(WizardStep.BACKGROUND_COLOR)),
            foreground_color=parse_optional_color(self.value(WizardStep.FOREGROUND_COLOR)),
        )


@dataclass(frozen=True)
class ViewingCountdowns:
    pass


@dataclass(frozen=True)
class CreatingCountdown:
    step: WizardStep = WizardStep.NAME
    draft: Draft = field(default_factory=Draft)


AppState = Union[ViewingCountdowns, CreatingCountdown]


def initial_state(countdowns: CountdownList) -> AppState:
    if countdowns.is_empty:
        return CreatingCountdown(WizardStep.NAME)
    return ViewingCountdowns()
