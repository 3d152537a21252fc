"""Analysis engines for regime comparison results."""

from regime_analyzer.core.analyzers.recommendations import (
    RecommendationProvider,
    RuleBasedRecommendationProvider,
    generate_recommendations,
)

__all__ = [
    "RecommendationProvider",
    "RuleBasedRecommendationProvider",
    "generate_recommendations",
]
