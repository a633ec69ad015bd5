"""Output layer: Rich console, per-op renderers, and the JSON/quiet formatter."""
