"""Core request-mapping logic and startup bootstrap."""
