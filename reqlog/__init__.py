"""Demo HTTP service with request-correlated structured logging."""
