"""HazardFusion — spatio-temporal fusion of geotagged hazard reports into alerts.

Public API surface:
    - FusionConfig: Runtime configuration
    - FusionEngine: Fusion orchestrator (process_reports, run_fusion_cycle)
    - FusionResult: Output of one fusion cycle
"""

__version__ = "1.0.0"
__author__ = "HazardFusion Contributors"

from config.settings import FusionConfig
from hazardfusion.engine import FusionEngine
from hazardfusion.errors import FusionCycleError
from hazardfusion.models.fusion import FusionResult

__all__ = [
    "__version__",
    "FusionConfig",
    "FusionEngine",
    "FusionCycleError",
    "FusionResult",
]
