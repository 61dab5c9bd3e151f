#!/usr/bin/env python3
"""
Main entry point for the SCTE-35 cue decoder.

This module provides a simple interface for running pyhlscue from the command line.
"""
import sys

from pyhlscue.cli import main

if __name__ == "__main__":
    sys.exit(main())
