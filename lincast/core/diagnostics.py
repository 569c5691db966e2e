# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Common diagnostic structure for parser front-end callers.

A message plus optional code, phase and span. Entry points that prefer
collecting errors over raising return a list of these.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .span import Span


@dataclass
class Diagnostic:
	"""Represents a front-end diagnostic (error/warning/etc.)."""

	message: str
	code: str | None = None
	# Pipeline phase that produced the diagnostic ("parser" for everything in
	# this package).
	phase: str | None = None
	severity: str = "error"
	span: Span = field(default_factory=Span)  # Span() denotes unknown.
	notes: list[str] = field(default_factory=list)

	def __post_init__(self) -> None:
		if self.span is None:  # type: ignore[unreachable]
			self.span = Span()

	def render(self) -> str:
		"""Format as `file:line:column: severity: message`, omitting unknown parts."""
		where = []
		if self.span.file:
			where.append(self.span.file)
		if self.span.line is not None:
			where.append(str(self.span.line))
			if self.span.column is not None:
				where.append(str(self.span.column))
		prefix = ":".join(where)
		text = f"{self.severity}: {self.message}"
		if prefix:
			text = f"{prefix}: {text}"
		for note in self.notes:
			text += f"\n  note: {note}"
		return text


__all__ = ["Diagnostic"]
