"""View-side bridge between the app builder UI and its native host."""

__version__ = "0.2.0"
