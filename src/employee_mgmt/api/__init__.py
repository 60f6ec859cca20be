"""HTTP/JSON surface over the service facades."""
