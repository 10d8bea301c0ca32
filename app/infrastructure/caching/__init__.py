"""Cache-aside layer kept outside the core services."""
