"""Terminal clients."""
