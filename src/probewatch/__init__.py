__all__ = [
    "Reporter",
    "HTTPStats",
    "FilterSet",
    "Result",
    "ResponseInfo",
    "RichTerminal",
    "LogTerminal",
    "Prober",
    "format_seconds",
]


from .filters import FilterSet
from .models import Result, ResponseInfo
from .prober import Prober
from .reporter import Reporter
from .stats import HTTPStats
from .terminal import RichTerminal, LogTerminal
from .utils import format_seconds
