import os

# DJANGO_SETTINGS_ENV picks the settings variant; development unless told otherwise
SETTINGS_ENV = os.getenv("DJANGO_SETTINGS_ENV", "development")

if SETTINGS_ENV == "production":
    from .production import *
else:
    from .development import *
