# stagewise/separations/absorption/__init__.py
"""Absorption and stripping stage construction"""

from .countercurrent import (
    CountercurrentSpec,
    outlet_gas_composition,
    countercurrent_operating_line,
    side_of_curve,
    resolve_orientation,
    check_countercurrent,
    countercurrent_policy,
    countercurrent_details,
)

from .crosscurrent import (
    CrosscurrentSpec,
    check_crosscurrent,
    crosscurrent_policy,
    crosscurrent_details,
)

from .concurrent import (
    ConcurrentSpec,
    concurrent_operating_line,
    check_concurrent,
    concurrent_policy,
    concurrent_details,
)

__all__ = [
    # Countercurrent
    'CountercurrentSpec',
    'outlet_gas_composition',
    'countercurrent_operating_line',
    'side_of_curve',
    'resolve_orientation',
    'check_countercurrent',
    'countercurrent_policy',
    'countercurrent_details',

    # Crosscurrent
    'CrosscurrentSpec',
    'check_crosscurrent',
    'crosscurrent_policy',
    'crosscurrent_details',

    # Concurrent
    'ConcurrentSpec',
    'concurrent_operating_line',
    'check_concurrent',
    'concurrent_policy',
    'concurrent_details',
]
