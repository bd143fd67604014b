"""Infrastructure layer for the Apliiq client: signing, caching, transport, errors."""
