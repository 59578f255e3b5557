"""GhpConnector: query and update GitHub Issues from the command line."""

__version__ = "0.1.0"
