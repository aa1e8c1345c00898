"""stakingrewards CLI — Typer-based command-line interface.

Provides the ``stakingrewards`` command with subcommands for simulating a
reward pool, inspecting an event journal, and showing the effective
configuration.

All output uses Rich for formatted terminal display.
"""
