"""
Discovery endpoint.

``GET /`` returns every API route registered on the application
together with its HTTP methods, so clients can find their way around
without reading the OpenAPI document.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Request
from fastapi.routing import APIRoute

router = APIRouter()


@router.get("/", response_model=List[Dict[str, Any]])
async def list_endpoints(request: Request) -> List[Dict[str, Any]]:
    """List the application's API routes in registration order."""
    return [
        {"path": route.path, "methods": sorted(route.methods)}
        for route in request.app.routes
        if isinstance(route, APIRoute)
    ]
