"""Dashboard route modules: pages, JSON API and htmx actions."""
