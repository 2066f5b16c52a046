"""
lift-advisor: next-session recommendations for strength training.

    from lift_advisor import generate_recommendation, to_legacy
"""

from .core.legacy import to_legacy
from .core.recommender import generate_recommendation

__version__ = "0.1.0"

__all__ = ["generate_recommendation", "to_legacy", "__version__"]
