"""Logging, tracing and metrics for kitchenpos."""

from kitchenpos.observability.config import configure_logging, setup_observability
from kitchenpos.observability.decorators import traced

__all__ = ["setup_observability", "configure_logging", "traced"]
