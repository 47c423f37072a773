"""Repository layer: all SQL lives here."""
