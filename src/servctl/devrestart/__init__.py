"""Development auto-restart on source changes."""

from ._restarter import DEFAULT_DEBOUNCE_MS, DevRestarter, format_change

__all__ = ["DEFAULT_DEBOUNCE_MS", "DevRestarter", "format_change"]
