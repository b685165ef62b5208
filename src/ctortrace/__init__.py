"""ctortrace - trace object construction order and dispatch during construction."""

__version__ = "0.1.0"
