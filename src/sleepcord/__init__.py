"""
Sleepcord - a Discord bot that puts the voice channels to bed.

Sleepcord listens for ``!`` text commands in guild channels. ``!sleep`` starts a
countdown and, once it elapses, disconnects every member of the guild from
voice, reporting progress back to the channel that asked.

Core Components:

- **Command Parser**: Pure mapping from message text to ``help``, ``ping`` or
  ``sleep`` commands
- **Dispatcher**: Runs one command against a per-message environment
- **Sleep Workflow**: Cooperative delay followed by sequential, failure-tolerant
  voice disconnects
- **Gateway**: Capability layer over the py-cord client

Usage:
    from sleepcord.main import main
    main()
"""
