"""
Text command handling for Sleepcord.

- **parser.py**: Pure parser from message text to a typed command.
- **dispatcher.py**: Runs a parsed command against a per-message environment.
"""
