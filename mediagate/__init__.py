"""
Media gateway: presigned upload/download proxy with image sniffing and resizing.
"""

__version__ = "1.2"
