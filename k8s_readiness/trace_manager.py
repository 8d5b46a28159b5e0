# Copyright 2026 The Kubernetes Authors.
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

import atexit
import functools
import inspect
import logging
import threading

from opentelemetry import trace

logger = logging.getLogger(__name__)

# --- Global state for the singleton TracerProvider ---
_TRACER_PROVIDER = None
_TRACER_PROVIDER_LOCK = threading.Lock()


def initialize_tracer(service_name: str) -> bool:
    """
    Registers a global SDK tracer provider exporting over OTLP, once per process.
    Returns False when the tracing extra is not installed.
    """
    global _TRACER_PROVIDER
    # First check (no lock) for performance.
    if _TRACER_PROVIDER is not None:
        return True

    try:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
        from opentelemetry.sdk.resources import Resource
        from opentelemetry.sdk.trace import TracerProvider
        from opentelemetry.sdk.trace.export import BatchSpanProcessor
    except ImportError:
        logger.error(
            "OpenTelemetry SDK not installed; install k8s-readiness[tracing]. "
            "Skipping tracer initialization."
        )
        return False

    with _TRACER_PROVIDER_LOCK:
        # Second check (with lock) to ensure thread safety.
        if _TRACER_PROVIDER is None:
            resource = Resource(attributes={"service.name": service_name})
            _TRACER_PROVIDER = TracerProvider(resource=resource)
            _TRACER_PROVIDER.add_span_processor(BatchSpanProcessor(OTLPSpanExporter()))
            trace.set_tracer_provider(_TRACER_PROVIDER)
            # Ensure shutdown is called only once when the process exits.
            atexit.register(_TRACER_PROVIDER.shutdown)
            logger.info(
                f"Global OpenTelemetry TracerProvider configured for service '{service_name}'."
            )
    return True


def get_tracer(service_name: str) -> trace.Tracer:
    """Returns a tracer; a no-op one unless a provider has been registered."""
    return trace.get_tracer(service_name.replace("-", "_"))


def trace_span(span_name):
    """Wraps a method in a span when its instance carries a tracer."""

    def decorator(func):
        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(self, *args, **kwargs):
                tracer = getattr(self, "tracer", None)
                if not tracer:
                    return await func(self, *args, **kwargs)
                with tracer.start_as_current_span(span_name):
                    return await func(self, *args, **kwargs)

            return async_wrapper

        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            tracer = getattr(self, "tracer", None)
            if not tracer:
                return func(self, *args, **kwargs)
            with tracer.start_as_current_span(span_name):
                return func(self, *args, **kwargs)

        return wrapper

    return decorator
