"""Rewrite agent shell commands into compact rtk equivalents."""

from .engine import Rewriter, RewriteResult, rewrite_command
from .session import RewriteSession, RewriteStats, probe_rtk

__all__ = [
    "RewriteResult",
    "RewriteSession",
    "RewriteStats",
    "Rewriter",
    "probe_rtk",
    "rewrite_command",
]
