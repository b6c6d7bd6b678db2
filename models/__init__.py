# Import all models to ensure they are registered with SQLAlchemy
from .user import User
from .log import Log

# Make models available at package level
__all__ = ['User', 'Log']
