"""
Invariant plugin API endpoints
Read-only view of the registry in dispatch order.
"""

from fastapi import APIRouter, Request, HTTPException
from typing import List, Dict, Any

router = APIRouter()


@router.get("")
async def list_plugins(request: Request) -> List[Dict[str, Any]]:
    """List registered plugins in dispatch order"""
    registry = request.app.state.solver.registry
    return [info.to_dict() for info in registry.list_plugins()]


@router.get("/{key}")
async def get_plugin(key: str, request: Request) -> Dict[str, Any]:
    """Get a single plugin by key"""
    registry = request.app.state.solver.registry
    for info in registry.list_plugins():
        if info.key == key:
            return info.to_dict()
    raise HTTPException(status_code=404, detail=f"Plugin '{key}' not found")
