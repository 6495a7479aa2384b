"""Interactive runtime: terminal, input, events, loop, and config."""

from .app import print_history, run_session, stdin_is_interactive

__all__ = ["print_history", "run_session", "stdin_is_interactive"]
