"""repo-inventory: Bitbucket Cloud repository inventory."""

__version__ = "0.1.0"
