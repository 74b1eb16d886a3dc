"""Result callback of the storage worker.

Results carry no correlation id, so this endpoint can only log them and echo
them back; it cannot route them to the request that caused them.
"""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/response", tags=["response"])


@router.post("/")
async def relay_result(request: Request) -> JSONResponse:
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(e)}
        )
    if not isinstance(payload, dict):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "result must be a JSON object"},
        )
    logger.info("Received result from storage service: %s", payload)
    return JSONResponse(content=payload)
