"""
impact-radar test suite.

- Unit tests for individual graph, indexing and config components
- Integration tests running the scanner, builder and CLI together
"""
