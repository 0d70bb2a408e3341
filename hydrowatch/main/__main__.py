"""
Main module entry point.

Runs the preprocessing worker: python -m hydrowatch.main
"""

from .worker import main

if __name__ == "__main__":
    main()
