"""Infrastructure adapters: storage, parsers and reports."""
