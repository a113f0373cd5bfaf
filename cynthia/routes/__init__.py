"""HTTP routes for the page server."""
