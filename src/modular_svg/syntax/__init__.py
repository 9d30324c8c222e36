"""Input tree syntax: the closed set of node variants the compiler accepts."""
