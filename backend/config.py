import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Comma separated list of allowed origins; '*' allows any origin
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')
    PORT = int(os.environ.get('PORT', '3001'))
    # Longest accepted room / player name
    MAX_NAME_LENGTH = int(os.environ.get('MAX_NAME_LENGTH', '32'))
    # Idle room reaper (seconds). 0 disables the sweep.
    ROOM_IDLE_TTL_SEC = int(os.environ.get('ROOM_IDLE_TTL_SEC', '0'))
    ROOM_SWEEP_INTERVAL_SEC = int(os.environ.get('ROOM_SWEEP_INTERVAL_SEC', '30'))
    # Cost factor for hashing private room passwords
    BCRYPT_LOG_ROUNDS = int(os.environ.get('BCRYPT_LOG_ROUNDS', '10'))
    # Pre-hash with sha256 so passwords over bcrypt's 72 byte limit are accepted
    BCRYPT_HANDLE_LONG_PASSWORDS = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
