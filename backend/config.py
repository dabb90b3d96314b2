import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '3000'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    # Comma separated list, '*' allows any origin
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    # World geometry (pixels). Players stay WORLD_MARGIN away from the edges.
    WORLD_WIDTH = int(os.environ.get('WORLD_WIDTH', '640'))
    WORLD_HEIGHT = int(os.environ.get('WORLD_HEIGHT', '480'))
    WORLD_MARGIN = int(os.environ.get('WORLD_MARGIN', '20'))
    PICKUP_RADIUS = float(os.environ.get('PICKUP_RADIUS', '20'))
    INITIAL_COLLECTIBLES = int(os.environ.get('INITIAL_COLLECTIBLES', '3'))
    MAX_COLLECTIBLE_VALUE = int(os.environ.get('MAX_COLLECTIBLE_VALUE', '5'))
    # Step used by relative (direction + speed) movement when the client omits speed
    DEFAULT_SPEED = float(os.environ.get('DEFAULT_SPEED', '4'))
    POWERED_BY = os.environ.get('POWERED_BY', 'PHP 7.4.3')
    # Static surface
    BACKEND_ROOT = os.path.abspath(os.path.dirname(__file__))
    VIEWS_DIR = os.environ.get('VIEWS_DIR') or os.path.join(BACKEND_ROOT, 'views')
    PUBLIC_DIR = os.environ.get('PUBLIC_DIR') or os.path.join(BACKEND_ROOT, 'public')
    ASSETS_DIR = os.environ.get('ASSETS_DIR') or os.path.join(BACKEND_ROOT, 'assets')
    # Seed for spawn positions and values; unset means nondeterministic
    RANDOM_SEED = int(os.environ['RANDOM_SEED']) if os.environ.get('RANDOM_SEED') else None
