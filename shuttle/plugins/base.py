"""Base model backend with retry and circuit breaker."""

from __future__ import annotations

import asyncio
import logging
import random
import time
from dataclasses import dataclass

from ..errors import ModelInvocationError
from ..models import ModelAction, ModelInfo
from ..types import ChunkSink, GenerateRequest, GenerateResponse

logger = logging.getLogger(__name__)


@dataclass
class RetryConfig:
    max_retries: int = 3
    base_delay: float = 1.0
    max_delay: float = 30.0


@dataclass
class CircuitBreakerConfig:
    failure_threshold: int = 5
    reset_time: float = 60.0


class ModelBackend(ModelAction):
    """
    Abstract backend. Subclass and implement ``_do_generate``.

    Only non-streaming calls are retried: once chunks have reached the
    caller, a retry would deliver them twice.
    """

    def __init__(
        self,
        name: str,
        info: ModelInfo | None = None,
        retry: RetryConfig | None = None,
        circuit_breaker: CircuitBreakerConfig | None = None,
    ) -> None:
        super().__init__(name, info=info)
        self._retry = retry or RetryConfig()
        self._cb = circuit_breaker or CircuitBreakerConfig()
        self._failures = 0
        self._last_failure = 0.0

    async def invoke(
        self, request: GenerateRequest, on_chunk: ChunkSink | None = None
    ) -> GenerateResponse:
        self._check_circuit()
        if on_chunk is not None:
            return await self._tracked(self._do_generate(request, on_chunk))
        return await self._with_retry(request)

    # -- Override this --

    async def _do_generate(
        self, request: GenerateRequest, on_chunk: ChunkSink | None
    ) -> GenerateResponse:
        raise NotImplementedError

    # -- Internals --

    def _check_circuit(self) -> None:
        if self._failures >= self._cb.failure_threshold:
            if time.time() - self._last_failure < self._cb.reset_time:
                raise ModelInvocationError(
                    self.name, f"Circuit breaker open for {self.name}", code="MODEL_CIRCUIT_OPEN"
                )
            self._failures = 0

    async def _tracked(self, coro):
        try:
            result = await coro
        except Exception:
            self._record_failure()
            raise
        self._failures = 0
        return result

    def _record_failure(self) -> None:
        self._failures += 1
        self._last_failure = time.time()

    async def _with_retry(self, request: GenerateRequest) -> GenerateResponse:
        last_err: Exception | None = None
        for i in range(self._retry.max_retries + 1):
            try:
                result = await self._do_generate(request, None)
                self._failures = 0
                return result
            except Exception as e:
                last_err = e
                self._record_failure()
                if i < self._retry.max_retries:
                    delay = min(
                        self._retry.base_delay * (2**i) + random.random() * 0.1,
                        self._retry.max_delay,
                    )
                    logger.warning(
                        "Model %s failed (%s), retrying in %.2fs", self.name, e, delay
                    )
                    await asyncio.sleep(delay)
        raise last_err
