"""Readers for tab-delimited annotation files."""

from seedreport.io.tabbed import TRUE_VALUES, Line, TabbedLineReader

__all__ = ["Line", "TabbedLineReader", "TRUE_VALUES"]
