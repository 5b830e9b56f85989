"""
Dependency injection for API endpoints.
"""
from fastapi import Request

from app.services.game_service import GameService
from app.services.move_selector import MoveSelector
from app.services.settings_service import SettingsStore
from app.services.stats_service import StatsAggregator


def get_game_service(request: Request) -> GameService:
    return request.app.state.game_service


def get_stats_aggregator(request: Request) -> StatsAggregator:
    return request.app.state.stats_aggregator


def get_settings_store(request: Request) -> SettingsStore:
    return request.app.state.settings_store


def get_move_selector(request: Request) -> MoveSelector:
    """Selector shared by the stateless engine endpoints."""
    return request.app.state.move_selector
