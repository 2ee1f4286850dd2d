"""Domain logic free of I/O."""
