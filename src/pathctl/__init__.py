"""pathctl — shortest-path teaching CLI over weighted undirected graphs."""

__version__ = "0.3.0"
