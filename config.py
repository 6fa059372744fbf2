import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Scripted opponent "thinking" delay (seconds)
    OPPONENT_DELAY_SEC = float(os.environ.get('OPPONENT_DELAY_SEC', '1.0'))
    ROOM_CODE_LENGTH = int(os.environ.get('ROOM_CODE_LENGTH', '4'))
    # Comma separated list of origins allowed for CORS and Socket.IO
    CORS_ORIGINS = [
        o.strip() for o in os.environ.get(
            'CORS_ORIGINS',
            'http://localhost:5173,http://127.0.0.1:5173,http://localhost:19006,http://127.0.0.1:19006',
        ).split(',') if o.strip()
    ]
