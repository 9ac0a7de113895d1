"""Dependency helper for the per-app auto-start registry."""

from __future__ import annotations

from fastapi import Request

from planpilot.interfaces.api.services.auto_start_registry import AutoStartRegistry


def get_auto_start_registry(request: Request) -> AutoStartRegistry:
    registry = getattr(request.app.state, "auto_start_registry", None)
    if registry is None:
        registry = AutoStartRegistry()
        request.app.state.auto_start_registry = registry
    return registry
