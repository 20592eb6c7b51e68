from dataclasses import dataclass
from typing import Tuple, Union

from app.models.passenger import PassengerRecord
from app.models.stats import ModelStats


# One-shot load state: Loading -> Ready or Failed
@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class Ready:
    passengers: Tuple[PassengerRecord, ...]
    stats: ModelStats


@dataclass(frozen=True)
class Failed:
    error: str


DatasetState = Union[Loading, Ready, Failed]

_state: DatasetState = Loading()


def set_dataset(state: DatasetState) -> None:
    global _state
    _state = state


# Dependency for API routes
def get_dataset() -> DatasetState:
    return _state
