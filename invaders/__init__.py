from .actions import Key, Keyboard
from .config import FormationConfig, GameConfig, ScreenConfig, ShieldConfig
from .game import HeadlessFrontend, run
from .render import Screen
from .sim.session import Phase, Session

__all__ = [
    "FormationConfig",
    "GameConfig",
    "HeadlessFrontend",
    "Key",
    "Keyboard",
    "Phase",
    "Screen",
    "ScreenConfig",
    "Session",
    "ShieldConfig",
    "run",
]
