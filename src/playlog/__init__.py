"""playlog: import Spotify listening-history exports into SQLite and query them."""

__version__ = "0.1.0"
