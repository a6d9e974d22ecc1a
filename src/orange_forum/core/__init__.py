"""Process-level configuration, errors and security primitives."""
