"""FastAPI dependencies shared by the endpoints."""
from fastapi import Request
from app.models.stremio import Manifest
from app.services.dispatcher import ResourceDispatcher


def get_dispatcher(request: Request) -> ResourceDispatcher:
    """Resolve the dispatcher created by the application factory."""
    return request.app.state.dispatcher


def get_app_manifest(request: Request) -> Manifest:
    """Resolve the manifest the dispatcher was built with."""
    return request.app.state.dispatcher.manifest
