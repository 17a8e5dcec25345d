"""Repository layer: DB access helpers (SQLite).

Keep functions thin and focused, so the store avoids SQL strings.
"""
from __future__ import annotations
