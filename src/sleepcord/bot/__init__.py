"""
Discord integration for Sleepcord.

- **gateway.py**: Capability interface over the py-cord client (guild lookup,
  member listing, voice disconnects, plain messages) and its Discord adapter.
- **environment.py**: Per-command bundle of gateway, reply channel, target
  guild and error sink.
- **cogs/**: Event listeners wired into the bot.
"""
