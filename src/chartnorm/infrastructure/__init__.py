"""Infrastructure layer: file I/O for datasets."""
