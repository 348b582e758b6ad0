"""mediarig - containerised media tool integration harness."""

__version__ = "0.1.0"
