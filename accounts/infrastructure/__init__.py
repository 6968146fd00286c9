"""Infrastructure layer: persistence, HTTP surface, metrics and wiring."""
