from .clock import Clock
from .formation import CellState, Formation
from .session import Phase, Session
from .shield import Shield

__all__ = ["CellState", "Clock", "Formation", "Phase", "Session", "Shield"]
