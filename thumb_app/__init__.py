"""thumb_app
Thumbnail service: filesystem mode and the two-connection TCP relay.
"""

__version__ = "0.3.0"
