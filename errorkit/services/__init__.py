"""Console coloring, the message store and error resolution."""
