"""Decision-point services: resolution, profiles, tunnels, recommendations, win probability."""

from pitch_intel.services.context_store import ContextStore
from pitch_intel.services.coordinate_resolver import CoordinateCache, CoordinateResolver
from pitch_intel.services.game_session import GameSession
from pitch_intel.services.optimal_recommender import OptimalPitchRecommender
from pitch_intel.services.pitch_refiner import SpecificPitchRefiner
from pitch_intel.services.tunnel_detector import detect_tunnel
from pitch_intel.services.win_probability import win_probability

__all__ = [
    "ContextStore",
    "CoordinateCache",
    "CoordinateResolver",
    "GameSession",
    "OptimalPitchRecommender",
    "SpecificPitchRefiner",
    "detect_tunnel",
    "win_probability",
]
