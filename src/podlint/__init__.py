"""podlint: line-attributed validation of Pod manifests."""

__version__ = "0.1.0"
