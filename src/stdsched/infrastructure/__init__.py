"""Infrastructure layer: logging, the scheduler repository and the default runtime."""
