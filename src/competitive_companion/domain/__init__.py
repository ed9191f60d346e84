"""Domain layer: task records, parser descriptors and errors."""
