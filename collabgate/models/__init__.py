"""Pydantic and dataclass models for collaboration routing."""

from .registry_models import (
    CoCenterInfo,
    CoCenterInfoMessage,
    OptimalPathMessage
)
from .routing_models import RoutingDecision

__all__ = [
    "CoCenterInfo",
    "CoCenterInfoMessage",
    "OptimalPathMessage",
    "RoutingDecision"
]
