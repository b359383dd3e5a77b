"""Services layer - orchestrates persistence lookups and statistics components."""
