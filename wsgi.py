# wsgi.py
"""
WSGI entry point, e.g. `gunicorn wsgi:application`.
Builds the student records app through the create_app() factory.
"""

from app import create_app
from config.config import Config

application = create_app()

# Alias so `flask --app wsgi` and "python wsgi.py" both work
app = application

if __name__ == "__main__":
    # Local development server
    app.run(host=Config.APP_HOST, port=Config.APP_PORT, debug=Config.DEBUG)
