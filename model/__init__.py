"""
model/
------
Core data layer.  Public API:

    from model import ArrayModel, Tag
    from model import StatsTracker
    from model import SortListener, EventHub
"""

from model.events import SortListener, EventHub
from model.stats  import StatsTracker
from model.array  import ArrayModel, Tag, DEFAULT_MAX_SIZE, parse_values

__all__ = [
    "ArrayModel",   "Tag",   "DEFAULT_MAX_SIZE",   "parse_values",
    "StatsTracker",
    "SortListener", "EventHub",
]
