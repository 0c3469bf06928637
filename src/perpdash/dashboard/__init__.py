"""Dashboard layer -- FastAPI app, routes, view model and poll loop."""
