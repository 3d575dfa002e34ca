"""
Utility helpers for Sleepcord.

- **logger.py**: Centralized logging configuration with coloured console output
  through prompt_toolkit, a per-session rotating log file under ``logs/`` and
  suppression of chatty Discord networking loggers.
"""
