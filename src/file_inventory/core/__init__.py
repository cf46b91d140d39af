"""Core scanning, classification and configuration for file-inventory."""
