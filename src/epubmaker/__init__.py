"""Build EPUB packages from directories or zip archives of page files."""

__version__ = "0.1.0"
