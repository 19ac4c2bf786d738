#!/usr/bin/env python3
"""
Problem matcher module entry point.

Allows the module to be executed as:
    python -m problem_matcher file build.log --matcher gcc.json
"""

from .cli import main

if __name__ == '__main__':
    main()
