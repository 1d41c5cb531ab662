"""Core catalog logic: fetching, caching and querying Pokemon."""
