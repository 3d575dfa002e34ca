"""
Plain data types shared across Sleepcord.

- **command_datatypes.py**: Parsed text commands (help, ping, sleep) and the
  parse error raised for malformed input.
- **workflow_events.py**: Progress events of the sleep workflow and their
  channel-facing text.
"""
