"""Cookie-authenticated Codeforces web client: problem scraping and solution submission."""

__version__ = "0.1.0"
