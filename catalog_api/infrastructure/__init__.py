"""Infrastructure layer: configuration, database, logging and security."""
