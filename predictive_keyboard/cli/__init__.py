from predictive_keyboard.cli.cli import CLI, main

__all__ = ["CLI", "main"]
