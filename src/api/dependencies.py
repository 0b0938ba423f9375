"""FastAPI dependency injection helpers."""

from fastapi import Request

from src.infrastructure.catalog import CatalogStore
from src.infrastructure.locks import BusyGuard
from src.services.simulator import SimulatorService


def get_simulator(request: Request) -> SimulatorService:
    return request.app.state.simulator


def get_catalog(request: Request) -> CatalogStore:
    return request.app.state.simulator.catalog


def get_busy_guard(request: Request) -> BusyGuard:
    return request.app.state.busy_guard
