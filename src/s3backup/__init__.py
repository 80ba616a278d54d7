"""Upload a local directory to S3, audit bucket access and verify the upload."""

__version__ = "0.1.0"
