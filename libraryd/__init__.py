"""libraryd: REST daemon for the VIM Library file manager."""

__version__ = "0.1.0"
