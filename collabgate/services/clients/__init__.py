"""
Collaboration agent clients.

This package provides the base class shared by the center registry and
path planner clients.
"""
from .base_client import BaseAgentClient

__all__ = ["BaseAgentClient"]
