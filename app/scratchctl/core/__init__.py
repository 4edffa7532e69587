"""Core primitives shared by all scratchctl modules."""
