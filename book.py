#!/usr/bin/env python3
"""
Convenience entry point for running clinicbooking directly.

Usage: python book.py [command] [options]
"""

from clinicbooking.cli.app import app

if __name__ == "__main__":
    app()
