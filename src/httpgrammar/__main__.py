"""CLI entry point: python -m httpgrammar parse [FILE]"""
from httpgrammar.cli import main

if __name__ == "__main__":
    main()
