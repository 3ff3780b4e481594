"""Stitch numbered event directories of JPEG frames into WebM videos."""
