"""HTTP routes and error handlers."""
