"""Package per le view delle transazioni."""
