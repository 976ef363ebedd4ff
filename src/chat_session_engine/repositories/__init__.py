"""Message store implementations."""
