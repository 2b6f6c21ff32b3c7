"""Portfolio API: ownership-scoped REST access to a real-estate portfolio."""
