"""Generic endpoint: typed dispatch over a descriptor and a transport.

Architecture:
    ``Endpoint[D, T]`` owns one descriptor of type ``D`` plus an optional
    slug and parameter bag. Each verb method records the verb on the
    descriptor, awaits the transport's matching method and reconciles the
    transport's completion into exactly one ``Result[T]`` or ``Error``.

Declaring an endpoint:
    class Users(Endpoint[UsersDescriptor, User]):
        pass

    users = Users(slug={"id": 42})
    response = await users.get()

    The type arguments are read from the subscripted base when the subclass
    is created. ``Endpoint[UsersDescriptor, User]()`` works too; Python
    records the arguments on the instance after construction.

Guarantees:
    - The callback runs exactly once per verb call, even when the transport
      completes twice, never completes, or raises a ``PolymerError``.
      Completions arriving after the transport coroutine returned are
      ignored. ``ConfigurationError`` propagates and skips the callback.
    - Calls are independent: no deduplication, queuing or cancellation.
      Concurrent calls on one endpoint may complete in any order.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar, get_args, get_origin

from ..models.response import Response
from .descriptor import EndpointDescriptor
from .enums import OperationType
from .exceptions import ConfigurationError, PolymerError
from .reconcile import reconcile_raw

if TYPE_CHECKING:
    from ..runtime.rest.transport import Parameters, RESTTransport

logger = logging.getLogger(__name__)

D = TypeVar("D", bound=EndpointDescriptor)
T = TypeVar("T")

ResponseCallback = Callable[[Response[T]], "None | Awaitable[None]"]


class Endpoint(Generic[D, T]):
    """Typed REST endpoint parameterized by a descriptor and a result type."""

    descriptor_class: ClassVar[type[EndpointDescriptor] | None] = None
    result_type: ClassVar[type | None] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        for base in cls.__dict__.get("__orig_bases__", ()):
            origin = get_origin(base)
            if not (isinstance(origin, type) and issubclass(origin, Endpoint)):
                continue
            args = get_args(base)
            if len(args) != 2:
                continue
            descriptor_class, result_type = args
            if isinstance(descriptor_class, type) and "descriptor_class" not in cls.__dict__:
                cls.descriptor_class = descriptor_class
            if isinstance(result_type, type) and "result_type" not in cls.__dict__:
                cls.result_type = result_type

    def __init__(
        self,
        slug: Any = None,
        parameters: Parameters | None = None,
        *,
        transport: RESTTransport | None = None,
    ) -> None:
        """Initialize endpoint.

        Args:
            slug: Value substituted into ``:name`` components of the path
            parameters: Mapping or pydantic model encoded by the transport
            transport: Transport to dispatch through (defaults to an
                ``HTTPTransport`` owned and closed by this endpoint)
        """
        self._slug = slug
        self._parameters = parameters
        self._descriptor: D | None = None
        self._transport = transport
        self._owns_transport = transport is None

    # Configuration

    def _resolved_types(self) -> tuple[type[EndpointDescriptor], type]:
        descriptor_class = type(self).descriptor_class
        result_type = type(self).result_type
        orig_class = getattr(self, "__orig_class__", None)
        if orig_class is not None:
            args = get_args(orig_class)
            if len(args) == 2:
                if descriptor_class is None and isinstance(args[0], type):
                    descriptor_class = args[0]
                if result_type is None and isinstance(args[1], type):
                    result_type = args[1]
        if descriptor_class is None or result_type is None:
            raise ConfigurationError(
                f"{type(self).__name__} must be declared as "
                "Endpoint[DescriptorClass, ResultType] with concrete types"
            )
        if not issubclass(descriptor_class, EndpointDescriptor):
            raise ConfigurationError(
                f"{descriptor_class.__name__} is not an EndpointDescriptor subclass"
            )
        return descriptor_class, result_type

    @property
    def descriptor(self) -> D:
        """The descriptor owned by this endpoint, created on first access."""
        if self._descriptor is None:
            descriptor_class, _ = self._resolved_types()
            self._descriptor = descriptor_class()  # type: ignore[assignment]
        return self._descriptor  # type: ignore[return-value]

    @property
    def slug(self) -> Any:
        return self._slug

    @property
    def parameters(self) -> Parameters | None:
        return self._parameters

    @property
    def transport(self) -> RESTTransport:
        if self._transport is None:
            from ..runtime.rest.transport import HTTPTransport

            self._transport = HTTPTransport()
        return self._transport

    # Networking

    async def get(self, callback: ResponseCallback[T] | None = None) -> Response[T]:
        """Dispatch a GET; ``callback`` receives the response exactly once."""
        return await self._dispatch(OperationType.GET, callback)

    async def post(self, callback: ResponseCallback[T] | None = None) -> Response[T]:
        return await self._dispatch(OperationType.POST, callback)

    async def put(self, callback: ResponseCallback[T] | None = None) -> Response[T]:
        return await self._dispatch(OperationType.PUT, callback)

    async def patch(self, callback: ResponseCallback[T] | None = None) -> Response[T]:
        return await self._dispatch(OperationType.PATCH, callback)

    async def delete(self, callback: ResponseCallback[T] | None = None) -> Response[T]:
        return await self._dispatch(OperationType.DELETE, callback)

    async def _dispatch(
        self,
        operation: OperationType,
        callback: ResponseCallback[T] | None,
    ) -> Response[T]:
        descriptor = self.descriptor
        _, result_type = self._resolved_types()
        descriptor._set_operation(operation)
        logger.debug("Dispatching request", extra=descriptor.describe())

        delivered: list[Response[T]] = []

        def completion(raw_result: Any, raw_error: BaseException | None = None) -> None:
            if delivered:
                logger.warning(
                    "Transport completed more than once; ignoring",
                    extra={"operation": operation.value, "endpoint": type(self).__name__},
                )
                return
            delivered.append(reconcile_raw(raw_result, raw_error, result_type))

        send = getattr(self.transport, operation.value.lower())
        try:
            await send(
                descriptor,
                self._slug,
                self._parameters,
                completion,
                result_type=result_type,
            )
        except ConfigurationError:
            raise
        except PolymerError as exc:
            logger.error(
                "Transport raised instead of completing",
                extra={"operation": operation.value, "endpoint": type(self).__name__},
                exc_info=True,
            )
            completion(None, exc)

        if not delivered:
            logger.warning(
                "Transport returned without completing",
                extra={"operation": operation.value, "endpoint": type(self).__name__},
            )
            completion(None, None)

        response = delivered[0]
        if callback is not None:
            outcome = callback(response)
            if inspect.isawaitable(outcome):
                await outcome
        return response

    async def close(self) -> None:
        """Close the transport if this endpoint created it."""
        if self._owns_transport and self._transport is not None:
            await self._transport.close()

    async def __aenter__(self) -> Endpoint[D, T]:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
