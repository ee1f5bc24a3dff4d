"""Build type builders for services and pull requests."""
