"""SST Console: admin backend for user management and compliance reports."""

__version__ = "0.1.0"
