"""Crypto asset registry: normalization, SQL building and SQLite storage for asset records."""
