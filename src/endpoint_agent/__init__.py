"""Spring Controller 엔드포인트 목록 추출기."""

__version__ = "0.1.0"

from endpoint_agent.run import run_endpoints
from endpoint_agent.walker import walk_controllers

__all__ = ["run_endpoints", "walk_controllers"]
