# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Starlette integration: bind a live request and render binding errors.

Usage::

    async def create_order(request: Request) -> JSONResponse:
        order = OrderForm()
        await bind_starlette(request, order)
        ...

    app = Starlette(
        routes=[Route("/orders/{tenant}", create_order, methods=["POST"])],
        exception_handlers={BindingException: binding_exception_handler},
    )
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Any

from starlette.requests import Request
from starlette.responses import JSONResponse

from flybind.binder import Binder, get_default_binder
from flybind.binding.request import BindingRequest
from flybind.kernel.exceptions import (
    BindingException,
    ConversionException,
    DecodeException,
    NotAPointerException,
    UnsupportedTypeException,
)

# Exception -> HTTP status code mapping (most specific first)
_STATUS_MAP: dict[type, int] = {
    # Client input
    DecodeException: 400,
    ConversionException: 422,
    # Destination declarations
    UnsupportedTypeException: 500,
    NotAPointerException: 500,
    # Catch-all
    BindingException: 400,
}

_JSON_SCALARS = (str, int, float, bool, type(None))


async def bind_starlette(request: Request, obj: Any, binder: Binder | None = None) -> None:
    """Bind a Starlette request onto *obj*, using its path parameters as the uri source."""
    binding_request = await BindingRequest.from_starlette(request)
    (binder or get_default_binder()).bind(binding_request, obj, request.path_params)


def _get_status_code(exc: Exception) -> int:
    for exc_type, status in _STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return status
    return 500


def _json_safe(value: Any) -> Any:
    if isinstance(value, _JSON_SCALARS):
        return value
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    return repr(value)


async def binding_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render a BindingException as a structured JSON error response."""
    status = _get_status_code(exc)
    body: dict[str, Any] = {
        "error": {
            "message": str(exc),
            "code": getattr(exc, "code", None) or type(exc).__name__,
            "transaction_id": getattr(request.state, "transaction_id", str(uuid.uuid4())),
            "timestamp": datetime.now(UTC).isoformat(),
            "status": status,
            "path": request.url.path,
        }
    }
    context = getattr(exc, "context", None)
    if context:
        body["error"]["context"] = {k: _json_safe(v) for k, v in context.items()}
    return JSONResponse(body, status_code=status)
