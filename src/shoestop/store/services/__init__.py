"""Store services: cart, checkout and order management."""
