from discovery.scoring.config import ScoringConfig
from discovery.scoring.engine import RecommendationEngine
from discovery.scoring.feed import DiscoveryFeedBuilder

__all__ = [
    "ScoringConfig",
    "RecommendationEngine",
    "DiscoveryFeedBuilder",
]
