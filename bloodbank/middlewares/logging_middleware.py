import time
import uuid
from typing import Callable

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from bloodbank.utils.ip_address_finder import get_client_ip, get_user_agent
from bloodbank.utils.logging_config import (
    LogContext,
    get_logger,
    log_api_access,
    log_performance_metric,
)

logger = get_logger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware to handle request/response logging and context management
    """

    def __init__(
        self,
        app: FastAPI,
        log_requests: bool = True,
        log_responses: bool = True,
        slow_request_seconds: float = 1.0,
    ):
        super().__init__(app)
        self.log_requests = log_requests
        self.log_responses = log_responses
        self.slow_request_seconds = slow_request_seconds

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        client_ip = get_client_ip(request)

        with LogContext(req_id=request_id):
            start_time = time.time()

            if self.log_requests:
                logger.info(
                    f"Incoming request: {request.method} {request.url.path}",
                    extra={
                        "extra_fields": {
                            "http_method": request.method,
                            "path": str(request.url.path),
                            "query_params": dict(request.query_params),
                            "client_ip": client_ip,
                            "user_agent": get_user_agent(request),
                            "action": "request_received",
                        }
                    },
                )

            try:
                response = await call_next(request)
            except Exception as e:
                response_time = time.time() - start_time
                logger.error(
                    f"Request failed: {request.method} {request.url.path}",
                    extra={
                        "extra_fields": {
                            "http_method": request.method,
                            "path": str(request.url.path),
                            "error_type": type(e).__name__,
                            "error_message": str(e),
                            "response_time_seconds": round(response_time, 4),
                            "client_ip": client_ip,
                            "action": "request_failed",
                        }
                    },
                    exc_info=True,
                )
                raise

            response_time = time.time() - start_time
            status_code = response.status_code

            if self.log_responses:
                logger.info(
                    f"Request completed: {request.method} {request.url.path} - {status_code}",
                    extra={
                        "extra_fields": {
                            "http_method": request.method,
                            "path": str(request.url.path),
                            "status_code": status_code,
                            "response_time_seconds": round(response_time, 4),
                            "client_ip": client_ip,
                            "action": "request_completed",
                        }
                    },
                )

            log_api_access(
                method=request.method,
                path=str(request.url.path),
                status_code=status_code,
                response_time=response_time,
                ip_address=client_ip,
            )

            if response_time > self.slow_request_seconds:
                log_performance_metric(
                    operation=f"{request.method} {request.url.path}",
                    duration_seconds=response_time,
                    additional_metrics={"status_code": status_code},
                )

            response.headers["X-Request-ID"] = request_id
            return response
