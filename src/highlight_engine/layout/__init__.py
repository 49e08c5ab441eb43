"""Line segmentation of token streams."""

from .segmenter import render_text, segment

__all__ = ["segment", "render_text"]
