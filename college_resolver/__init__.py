"""College name resolution: canonical institution lookup and autocomplete."""

from .config_loader import Config, load_config
from .dataset import DatasetLoadError
from .models import InstitutionRecord, MatchSource, MatchStage, Resolution
from .service import CollegeResolutionService

__version__ = "0.1.0"

__all__ = [
    "CollegeResolutionService",
    "Config",
    "DatasetLoadError",
    "InstitutionRecord",
    "MatchSource",
    "MatchStage",
    "Resolution",
    "load_config",
]
