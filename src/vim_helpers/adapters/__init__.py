"""UI adapters that host the helpers."""
