"""
Content Store - Uniform binary content storage over FTP or a local directory.

This package provides:
- A storage backend contract with FTP and local filesystem implementations
- Checksum-based integrity verification on read
- Random storage key generation for new uploads
"""

__version__ = "1.0.0"
__author__ = "Content Store Team"
