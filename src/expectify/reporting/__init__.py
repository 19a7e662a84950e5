"""Console and junit renderings of suite results."""
