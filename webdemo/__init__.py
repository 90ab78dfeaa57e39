"""Web demo: routing, middleware, body parsing, uploads, templates and an HTTP client probe."""
