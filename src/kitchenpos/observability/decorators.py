"""OpenTelemetry tracing decorator for service operations."""

import functools
from collections.abc import Callable
from typing import Any, TypeVar

from opentelemetry import trace

from kitchenpos.exceptions import InvalidArgumentError

F = TypeVar("F", bound=Callable[..., Any])


def traced(span_name: str | None = None, service_name: str = "kitchenpos") -> Callable[[F], F]:
    """Run the decorated function inside a new span.

    The span records whether the call succeeded. Rejected requests
    (InvalidArgumentError) are tagged with their reason; any other exception
    is recorded on the span. Exceptions always propagate.

    Args:
        span_name: Name for the span (defaults to the function name)
        service_name: Tracer name and ``service.name`` span attribute

    Returns:
        Decorated function with tracing

    Example:
        @traced("menu.create")
        def create(self, request: MenuCreateRequest) -> Menu:
            ...
    """

    def decorator(func: F) -> F:
        name = span_name or func.__name__
        tracer = trace.get_tracer(service_name)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            with tracer.start_as_current_span(name) as span:
                span.set_attribute("service.name", service_name)
                if span_name:
                    span.set_attribute("function.name", func.__name__)

                try:
                    result = func(*args, **kwargs)
                except InvalidArgumentError as e:
                    span.set_attribute("success", False)
                    span.set_attribute("rejection.reason", e.reason)
                    raise
                except Exception as e:
                    span.set_attribute("success", False)
                    span.set_attribute("error.type", type(e).__name__)
                    span.set_attribute("error.message", str(e))
                    span.record_exception(e)
                    raise

                span.set_attribute("success", True)
                return result

        return wrapper  # type: ignore

    return decorator
