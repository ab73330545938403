"""Pool-order endpoints. Mounted at /api/v1/pool-orders in main.py."""
from typing import Annotated

from fastapi import Depends, Request
from fastapi.routing import APIRouter

from src.ob_common.response import ApiResponse, success_response
from src.ob_gateway.auth.dependencies import require_indexer_service
from src.ob_order.application import service
from src.ob_order.application.schemas import ReconcileRequest

router = APIRouter(prefix="/pool-orders", tags=["Pool Orders"])


@router.post("/reconcile")
async def reconcile(
    body: ReconcileRequest,
    request: Request,
    _service: Annotated[str, Depends(require_indexer_service)],
) -> ApiResponse:
    """Reconcile a batch of pool trigger events into the order store.

    Events that fail are left out of the results; retrying them is the
    caller's job and is safe.
    """
    result = await service.reconcile_pool_events(body)
    request_id = getattr(request.state, "request_id", None)
    return success_response(result.model_dump(), request_id=request_id)
