"""myFlix backend: movies, users, login and image storage over HTTP."""

__version__ = "1.0.0"
