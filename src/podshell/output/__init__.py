"""Output layer: Rich rendering of command results for terminals and pipes."""
