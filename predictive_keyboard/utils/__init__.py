# predictive_keyboard.utils - persistence, logging, config and threading helpers
