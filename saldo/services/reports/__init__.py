"""Report ed esportazioni."""
