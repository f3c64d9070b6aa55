"""Default configuration modules."""
