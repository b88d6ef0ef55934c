"""High-level pipeline orchestration.

Contains configuration, workflow orchestration, and parallel worker functions.
"""

from .config import MorphConfig
from .orchestrator import run_morphing_pipeline

__all__ = [
    'MorphConfig',
    'run_morphing_pipeline',
]
