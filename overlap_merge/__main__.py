"""
Main entry point for the overlap_merge package.
"""

from .cli import main

if __name__ == '__main__':
    main()
