"""HTTP API: FastAPI app, routes and schemas."""
