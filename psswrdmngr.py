#!/usr/bin/env python3
"""
psswrdmngr - Main entry point script.
This file serves as the executable entry point for the CLI.
"""

from cli.__main__ import app

if __name__ == "__main__":
    app()
