from app.models.court import Court
from app.models.booking import Booking

# This makes the models directory a Python package and ensures all models are loaded
