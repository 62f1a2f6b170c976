"""
Awaitable DynamoDB Requests

boto3 calls block and return their result directly. To chain store
operations with ``await`` we split a call into a pending request that does
nothing until ``send()`` is called, plus ``error``/``success`` listeners::

    request = BotoRequest(client, "GetItem", {"TableName": "users", "Key": key})
    data = await to_future(request)

``to_future`` registers both listeners first, then sends, then hands back an
asyncio future that settles exactly once: resolved with ``response.data`` or
rejected with the error payload. No timeout is imposed here; botocore's own
connect/read timeouts govern how long a request can hang.
"""

import asyncio
import logging
import threading
from typing import Any, Callable, Dict, List, Optional, Protocol

from botocore import xform_name
from pydantic import BaseModel, ConfigDict

from ..exceptions import StoreError

logger = logging.getLogger(__name__)

ERROR = "error"
SUCCESS = "success"


class StoreResponse(BaseModel):
    """Envelope passed to success listeners; ``data`` is the raw boto3 response."""

    model_config = ConfigDict(frozen=True)

    operation: str
    data: Dict[str, Any]


class PendingRequest(Protocol):
    """A single-shot store operation with event-style completion."""

    def on(self, event: str, handler: Callable[[Any], None]) -> Any:
        ...

    def send(self) -> None:
        ...


class BotoRequest:
    """
    Pending call to one low-level boto3 DynamoDB client operation.

    The call runs on the event loop's default executor when ``send()`` is
    invoked, and its outcome is emitted to the ``error`` or ``success``
    listeners from that worker thread. A request can be sent only once.
    """

    def __init__(self, client: Any, operation: str, params: Dict[str, Any]):
        """Initialize a pending request.

        Args:
            client: boto3 DynamoDB client
            operation: API operation name (e.g., "GetItem", "PutItem")
            params: Keyword parameters for the client call
        """
        self.client = client
        self.operation = operation
        self.params = params
        self._handlers: Dict[str, List[Callable[[Any], None]]] = {ERROR: [], SUCCESS: []}
        self._sent = False
        self._lock = threading.Lock()
        self._worker: Optional["asyncio.Future[None]"] = None

    def on(self, event: str, handler: Callable[[Any], None]) -> 'BotoRequest':
        """Register a listener for ``error`` or ``success``."""
        if event not in self._handlers:
            raise ValueError(f"Unknown request event '{event}', expected one of {sorted(self._handlers)}")
        self._handlers[event].append(handler)
        return self

    def send(self) -> None:
        """Start the request on the running loop's executor.

        Raises:
            RuntimeError: If the request was already sent, or no event loop is running
        """
        with self._lock:
            if self._sent:
                raise RuntimeError(f"{self.operation} request was already sent")
            self._sent = True

        loop = asyncio.get_running_loop()
        self._worker = loop.run_in_executor(None, self._execute)
        self._worker.add_done_callback(self._log_worker_failure)
        logger.debug(f"Sent {self.operation} on {self.params.get('TableName')}")

    def _execute(self) -> None:
        try:
            method = getattr(self.client, xform_name(self.operation))
            response = StoreResponse(operation=self.operation, data=method(**self.params))
        except Exception as e:
            # Lookup, call and response validation all settle through the error listeners
            self._emit(ERROR, e)
            return
        self._emit(SUCCESS, response)

    def _log_worker_failure(self, worker: "asyncio.Future[None]") -> None:
        if worker.cancelled():
            return
        error = worker.exception()
        if error is not None:
            logger.error(f"{self.operation} listener failed on {self.params.get('TableName')}: {error!r}")

    def _emit(self, event: str, payload: Any) -> None:
        for handler in self._handlers[event]:
            handler(payload)


def to_future(request: PendingRequest) -> 'asyncio.Future[Any]':
    """
    Turn a pending request into an asyncio future.

    Must be called from a coroutine (or callback) running on the event loop.
    Listeners may fire from any thread; settlement is always scheduled onto
    the loop that created the future.

    Args:
        request: Object exposing ``on(event, handler)`` and ``send()``

    Returns:
        Future resolved with the response's ``data``, or rejected with the
        error payload. Non-exception payloads are wrapped in StoreError.
    """
    loop = asyncio.get_running_loop()
    future = loop.create_future()

    def settle(event: str, payload: Any) -> None:
        if future.done():
            logger.debug(f"Ignoring late '{event}' for an already settled request")
            return
        if event == ERROR:
            future.set_exception(_as_exception(request, payload))
        else:
            future.set_result(payload.data)

    request.on(ERROR, lambda error: loop.call_soon_threadsafe(settle, ERROR, error))
    request.on(SUCCESS, lambda response: loop.call_soon_threadsafe(settle, SUCCESS, response))
    request.send()
    return future


def _as_exception(request: Any, payload: Any) -> BaseException:
    if isinstance(payload, BaseException):
        return payload
    params: Optional[Dict[str, Any]] = getattr(request, 'params', None)
    return StoreError(
        f"Request failed: {payload!r}",
        operation=getattr(request, 'operation', 'unknown'),
        table_name=(params or {}).get('TableName', 'unknown'),
        original_error=payload
    )
