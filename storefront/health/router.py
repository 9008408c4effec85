from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from storefront.health.service import health_payments_info
from storefront.utils.rate_limit import rate_limit_health_info

router = APIRouter(prefix="/health", tags=["Health"])

@router.get("")
def health_root():
    return {"ok": True}

@router.get("/payments")
def health_payments(request: Request):
    info = health_payments_info(request.app.state.orchestrator.provider.name)
    info["rate_limit"] = rate_limit_health_info(request)
    return JSONResponse(info)
