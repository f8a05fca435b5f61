"""Job Folder utilities."""
