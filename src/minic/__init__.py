"""minic: Pratt parser front end for a small C-like language."""

__version__ = "0.1.0"
