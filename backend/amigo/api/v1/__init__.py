from flask import Blueprint

# Create the versioned blueprint
v1_bp = Blueprint("v1", __name__)

# Import route modules so they register with v1_bp
from . import health
from . import auth
from . import users
from . import posts
from . import drafts
from . import social
from . import notifications
from . import storage
from . import changes
