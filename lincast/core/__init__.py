# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Shared source-location and diagnostic structures."""

from .diagnostics import Diagnostic
from .span import Span

__all__ = ["Diagnostic", "Span"]
