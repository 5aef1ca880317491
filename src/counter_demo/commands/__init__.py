"""
Commands - Command implementations for counter-demo.

Each module provides top-level CLI commands:
- demo:    Full read/write walk-through of the Counter contract
- counter: read, increment and set-number
- deploy:  Deploy a contract from a Foundry artifact
"""
