"""PostSomething API: posts, threaded comments and JWT authentication."""

__version__ = "0.1.0"
