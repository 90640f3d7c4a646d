"""Game session services: seats, move authority and broadcast.

This package holds the transport-independent core. Socket.IO handlers
in chessroom.socketio_events call into GameSession; nothing here
imports Flask.
"""
