__version__ = "0.1.0"

from .engine import predict, predict_detailed
from .models import CAUSES, NormalizedProfile, PredictionResult, PredictionTrace, ProfileInput

__all__ = [
    "CAUSES",
    "NormalizedProfile",
    "PredictionResult",
    "PredictionTrace",
    "ProfileInput",
    "predict",
    "predict_detailed",
]
