"""Art discovery backend: similarity recommendations and category browsing."""
