# stagewise/separations/distillation/__init__.py
"""Distillation stage construction"""

# McCabe-Thiele
from .mccabe_thiele import (
    DistillationSpec,
    FenskeEquation,
    MinimumReflux,
    pinch_point,
    minimum_reflux,
    feed_line_intersection,
    operating_lines,
    check_distillation,
    distillation_policy,
    feed_stage,
    distillation_details,
)

# Tray efficiency
from .efficiency import (
    check_efficiency,
    real_stages,
)

__all__ = [
    # McCabe-Thiele
    'DistillationSpec',
    'FenskeEquation',
    'MinimumReflux',
    'pinch_point',
    'minimum_reflux',
    'feed_line_intersection',
    'operating_lines',
    'check_distillation',
    'distillation_policy',
    'feed_stage',
    'distillation_details',

    # Efficiency
    'check_efficiency',
    'real_stages',
]
