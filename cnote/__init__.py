"""Source hygiene tooling for C codebases: comment cleaning, API docs and license headers."""

__version__ = "0.1.0"
