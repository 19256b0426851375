"""podshell: browse, edit, and script a hierarchical pod resource store."""

__version__ = "0.3.0"
