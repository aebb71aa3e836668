"""HTTP API for the quote oracle."""
