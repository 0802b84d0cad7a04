# essaycheck/client/bootstrap.py
from typing import Optional
from essaycheck.client.gateway import HttpGateway
from essaycheck.utils.tracer import ObservedGateway, Gateway

_gateway_singleton: Optional[Gateway] = None

def build_gateway() -> Gateway:
    global _gateway_singleton
    if _gateway_singleton is None:
        base = HttpGateway()                      # 순수 HTTP 클라이언트
        _gateway_singleton = ObservedGateway(base)  # Langfuse 관측 래퍼
    return _gateway_singleton
