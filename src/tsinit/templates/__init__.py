"""Template files copied verbatim into new projects."""
