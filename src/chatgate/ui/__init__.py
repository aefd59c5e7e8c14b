"""Terminal rendering for the chatgate CLI."""
