"""Template tree traversal and destination path resolution."""
