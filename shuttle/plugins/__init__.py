"""Model backends. Provider modules import their SDK and are loaded on demand."""

from .base import CircuitBreakerConfig, ModelBackend, RetryConfig

__all__ = ["CircuitBreakerConfig", "ModelBackend", "RetryConfig"]
