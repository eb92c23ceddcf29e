"""sender_app
Client side of the two-connection thumbnail protocol.
"""
