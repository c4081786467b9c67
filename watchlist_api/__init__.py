"""Watchlist API: shared movie watchlists over a small REST backend."""
