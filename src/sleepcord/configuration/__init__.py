"""
Configuration management for Sleepcord.

- **app_configuration.py**: File-locked YAML loader for ``config/app_config.yml``.
  Exposes the default ``!sleep`` delay, the optional target guild override and
  the sleep-on-ready switch. Falls back to defaults on missing or malformed files.
"""
