"""WebNest - create desktop web apps from URLs using an installed browser."""

__version__ = "1.0.0"
