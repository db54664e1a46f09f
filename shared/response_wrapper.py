import json
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from fastapi.responses import JSONResponse, Response

from shared.core.schemas import JsonOutResult
from shared.utils.app_status_code import AppStatusCode

ENVELOPE_KEYS = {"success", "status_code", "message"}


class JsonResponseMiddleware(BaseHTTPMiddleware):
    """Wraps successful JSON bodies into the {success, data, ...} envelope."""

    async def dispatch(self, request, call_next: Callable):
        # Skip OpenAPI/Swagger endpoints
        if request.url.path.startswith(("/openapi", "/docs", "/redoc")):
            return await call_next(request)

        response = await call_next(request)

        # Only wrap successful JSON responses
        if 200 <= response.status_code < 400 and "application/json" in response.headers.get("content-type", ""):
            body_bytes = b""
            async for chunk in response.body_iterator:
                body_bytes += chunk

            headers = {k: v for k, v in response.headers.items()
                       if k.lower() != "content-length"}

            try:
                data = json.loads(body_bytes.decode("utf-8"))
            except ValueError:
                # non-JSON, return the body as-is
                return Response(content=body_bytes, status_code=response.status_code,
                                headers=headers)

            # Skip if already wrapped
            if isinstance(data, dict) and ENVELOPE_KEYS.issubset(data.keys()):
                return Response(content=body_bytes, status_code=response.status_code,
                                headers=headers)

            wrapped = JsonOutResult(
                success=True,
                data=data,
                status_code=AppStatusCode.DATA_RETRIEVED_SUCCESSFULLY,
                message="Data retrieved successfully"
            ).model_dump(mode="json")

            return JSONResponse(
                content=wrapped,
                status_code=response.status_code,
                headers={k: v for k, v in headers.items()
                         if k.lower() != "content-type"}
            )

        return response
