"""
Components package for WatchService decomposition.
Provides HashCalculator, TargetResolver and ChangeDetector.
"""
from services.components.hash_calculator import HashCalculator
from services.components.target_resolver import TargetResolver
from services.components.change_detector import ChangeDetector

__all__ = [
    "HashCalculator",
    "TargetResolver",
    "ChangeDetector",
]
