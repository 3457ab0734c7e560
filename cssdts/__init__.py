"""TypeScript declaration generation for CSS modules."""

from __future__ import annotations

from typing import Any


__all__ = [
    "CSSExports",
    "Options",
    "create_dts_exports",
    "dispatch_service",
    "generate_file",
]


def create_dts_exports(*args: Any, **kwargs: Any):
    from cssdts.main import create_dts_exports as _create_dts_exports

    return _create_dts_exports(*args, **kwargs)


def generate_file(*args: Any, **kwargs: Any):
    from cssdts.main import generate_file as _generate_file

    return _generate_file(*args, **kwargs)


def dispatch_service(*args: Any, **kwargs: Any):
    from cssdts.service import dispatch as _dispatch

    return _dispatch(*args, **kwargs)


def __getattr__(name: str):
    if name == "CSSExports":
        from cssdts.exports import CSSExports

        return CSSExports
    if name == "Options":
        from cssdts.options import Options

        return Options
    raise AttributeError(name)
