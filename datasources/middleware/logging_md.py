import uuid
import time
from fastapi import Request
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from datasources.logging.logger import trace_context

class LoggingMiddleware(BaseHTTPMiddleware):
    """Give every request a trace id that repository and unit-of-work logs carry."""

    async def dispatch(self, request: Request, call_next):
        trace_id = request.headers.get("X-Trace-ID", str(uuid.uuid4()))
        request.state.trace_id = trace_id

        with trace_context(trace_id):
            start_time = time.time()
            logger.info(f"Request Started | Method: {request.method} | Path: {request.url.path}")

            try:
                response = await call_next(request)
            except Exception as e:
                process_time = (time.time() - start_time) * 1000
                logger.error(f"Request Failed | Error: {str(e)} | Duration: {process_time:.2f}ms")
                raise

            process_time = (time.time() - start_time) * 1000
            logger.info(
                f"Request Finished | Status: {response.status_code} | "
                f"Duration: {process_time:.2f}ms"
            )
            response.headers["X-Trace-ID"] = trace_id
            return response
