"""Domain layer: models, verdict parsing and errors."""
