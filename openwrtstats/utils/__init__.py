"""Utility modules for openwrtstats.

Modules:
    transform: Static file reading and HTML injection for the dashboard
    format: Human readable uptimes and byte sizes for text output
"""
from .transform import read_static, inject_js
from .format import format_uptime, format_bytes

__all__ = ["read_static", "inject_js", "format_uptime", "format_bytes"]
