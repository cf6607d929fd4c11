"""Output layer: Rich and JSON rendering of service results."""
