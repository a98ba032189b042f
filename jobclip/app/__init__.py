"""HTTP and storage boundaries around the extraction engine."""
