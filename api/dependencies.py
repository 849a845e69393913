"""
Dependency injection module for FastAPI.
Routes receive the snapshot through ``get_snapshot`` so tests can override it.
"""

from src.models import AgoraData
from api.services import SnapshotService


async def get_snapshot() -> AgoraData:
    return await SnapshotService.get_snapshot_data()
