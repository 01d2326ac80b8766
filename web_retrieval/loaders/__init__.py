"""Page content loaders."""
