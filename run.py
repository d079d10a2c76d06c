#!/usr/bin/env python3
"""
Launcher script for the accessory try-on live preview.

Usage:
    python run.py                        # Live webcam preview
    python -m tryon_app.cli --help       # Show CLI options
"""

if __name__ == "__main__":
    from tryon_app.app import main
    main()
