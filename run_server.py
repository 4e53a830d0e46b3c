#!/usr/bin/env python
"""HTTP API entrypoint for HabitStreak."""

import os

from habitstreak import create_app

app = create_app(os.getenv("HABITSTREAK_ENV"))

if __name__ == "__main__":
    app.run(port=int(os.getenv("HABITSTREAK_PORT", "3000")))
