"""Collage grid composition and fusion job pipeline."""
