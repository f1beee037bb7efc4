"""
Health check endpoints with upstream service readiness.
"""

import time

from fastapi import APIRouter, Request

from app.config import settings

router = APIRouter()


@router.get("/healthz")
async def healthz():
    """Basic health check - always returns 200 if app is running."""
    return {"status": "ok", "service": settings.SERVICE_NAME}


async def _check_upstream(client) -> dict:
    t0 = time.time()
    try:
        ok = await client.ping()
        check = {
            "ok": bool(ok),
            "latency_ms": round((time.time() - t0) * 1000, 1),
            "host": settings.upstream_host(client.base_url),
        }
        if not ok:
            check["error"] = "Health endpoint did not return success"
        return check
    except Exception as e:
        return {
            "ok": False,
            "error": f"{type(e).__name__}: {e}",
            "latency_ms": round((time.time() - t0) * 1000, 1),
        }


@router.get("/readyz")
async def readyz(request: Request):
    """
    Readiness check against both upstream services.
    Discovery endpoints still answer (with empty results) while these fail.
    """
    checks = {}

    # 1) Upstream services
    checks["user_service"] = await _check_upstream(request.app.state.user_directory)
    checks["follow_service"] = await _check_upstream(request.app.state.follow_graph)
    overall_ok = checks["user_service"]["ok"] and checks["follow_service"]["ok"]

    # 2) Configuration checks
    config_ok = True
    config_issues = []

    if not settings.USER_SERVICE_URL:
        config_issues.append("USER_SERVICE_URL not set")
        config_ok = False

    if not settings.FOLLOW_SERVICE_URL:
        config_issues.append("FOLLOW_SERVICE_URL not set")
        config_ok = False

    checks["configuration"] = {
        "ok": config_ok,
        "issues": config_issues if config_issues else None,
        "environment": settings.environment,
    }
    overall_ok = overall_ok and config_ok

    return {"overall_ok": overall_ok, "checks": checks, "timestamp": time.time()}
