"""Video Standards Compliance.

Scores media files against a delivery-standards catalog and plans the
ffmpeg transcodes that bring non-compliant files into line.
"""

__version__ = "0.1.0"
