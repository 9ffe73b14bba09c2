"""FastAPI application wiring."""
