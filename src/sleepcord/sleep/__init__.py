"""
The delayed "disconnect everyone from voice" workflow behind ``!sleep``.
"""
