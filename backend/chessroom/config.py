import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Listening port for run.py
    PORT = int(os.environ.get('PORT', '5000'))
    SOCKETIO_NAMESPACE = '/'
    # Extra origins allowed to reach the API and socket; None keeps same-origin only
    CORS_ALLOWED_ORIGINS = None
    # None starts from the standard initial position
    STARTING_FEN = None
    # Send the current boardState to every connection right after its role
    SEND_STATE_ON_JOIN = True
    # Optional: tell a player their move was dropped because it is not their turn
    NOTIFY_OUT_OF_TURN = False
