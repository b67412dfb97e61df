"""Application services used outside the request cycle."""
