#!/usr/bin/env python3
"""
Generate attachable 3D text.
"""

from attachable_text3d.cli import app

if __name__ == "__main__":
    app()
