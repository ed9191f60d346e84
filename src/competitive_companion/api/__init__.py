"""HTTP API exposing the parsers and delivery."""
