"""Blog list backend: REST API for blogs and user accounts."""
