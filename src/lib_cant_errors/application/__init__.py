"""Use cases: the error factory, generated kinds, routing and ports."""
