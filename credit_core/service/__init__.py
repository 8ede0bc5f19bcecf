"""Pure, synchronous decisioning logic."""
