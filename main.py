# main.py
"""
Main entry point for the showcase preview.
"""
from src.core.safe_main import run

if __name__ == '__main__':
    raise SystemExit(run())
