"""gh-contrib: reports on GitHub pull requests and issues by author."""

__version__ = "0.3.0"
