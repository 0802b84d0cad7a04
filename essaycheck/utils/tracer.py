# essaycheck/utils/tracer.py
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Protocol, runtime_checkable
import logging

from langfuse import Langfuse

from essaycheck.core.config import settings

logger = logging.getLogger(__name__)

LANGFUSE_AVAILABLE = bool(settings.LANGFUSE_PUBLIC_KEY and settings.LANGFUSE_SECRET_KEY)

# Langfuse 초기화 (키가 있을 때만)
lf: Optional[Langfuse] = None

if LANGFUSE_AVAILABLE:
    try:
        lf = Langfuse(
            public_key=settings.LANGFUSE_PUBLIC_KEY,
            secret_key=settings.LANGFUSE_SECRET_KEY,
            host=settings.LANGFUSE_HOST,
            release="v1.0.0",
        )
        logger.info(f"Langfuse initialized. Host: {settings.LANGFUSE_HOST}")
    except Exception as e:
        logger.warning(f"Langfuse initialization failed: {e}. Tracing disabled.")
        LANGFUSE_AVAILABLE = False
else:
    logger.debug("Langfuse credentials not set. Tracing disabled.")


@runtime_checkable
class Gateway(Protocol):
    endpoint: str

    @property
    def is_configured(self) -> bool: ...

    def send(self, *, message: str, history: Optional[List[Dict[str, Any]]] = None) -> str: ...


class ObservedGateway:
    """Records each outbound generation request as a Langfuse generation."""

    def __init__(self, inner: Gateway, service: str = "analysis-gateway"):
        self.inner = inner
        self.service = service

    @property
    def endpoint(self) -> str:
        return self.inner.endpoint

    @property
    def is_configured(self) -> bool:
        return self.inner.is_configured

    def send(
        self,
        *,
        message: str,
        history: Optional[List[Dict[str, Any]]] = None,
    ) -> str:
        if not (LANGFUSE_AVAILABLE and lf):
            return self.inner.send(message=message, history=history)

        md = {"service": self.service}
        with lf.start_as_current_generation(name="llm.essay_feedback", model=self.service) as gen:
            gen.update(input={"message": message, "history": history or []}, metadata=md)
            try:
                text = self.inner.send(message=message, history=history)
                gen.update(output=text)
                return text
            except Exception as e:
                gen.update(level="ERROR", status_message=str(e))
                raise
            finally:
                try:
                    lf.flush()
                except Exception as e:
                    logger.debug(f"Langfuse flush failed: {e}")



@contextmanager
def traced_analysis(**metadata: Any) -> Iterator[Optional[Any]]:
    """Wrap one analyze call in a Langfuse span; yields None when tracing is off."""
    if not (LANGFUSE_AVAILABLE and lf):
        yield None
        return

    with lf.start_as_current_span(name="essay_feedback.analyze") as span:
        span.update(metadata=metadata)
        try:
            yield span
        finally:
            try:
                lf.flush()
            except Exception as e:
                logger.debug(f"Langfuse flush failed: {e}")


def record_extraction(span: Optional[Any], kind: str, strategy: Optional[str]) -> None:
    """Attach the extraction tier to the analyze span."""
    if span is None:
        return
    span.update(metadata={"extraction": kind, "strategy": strategy})
