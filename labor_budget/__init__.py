"""Construction labor budget tracker.

Tracks the hours a construction crew spends on each budget item against the
budgeted hours, and derives productivity, cost and evolution reports from
them.
"""

__version__ = "1.0.0"
