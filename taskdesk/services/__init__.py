"""Domain services: tag codec, task repository, query engine, dashboard, users."""
