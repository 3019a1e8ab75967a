"""Remote keyword generation clients."""
