import logging
import os

from .main import create_app

logger = logging.getLogger(__name__)

# WSGI entry point, e.g. `gunicorn mentorbook.app:app`
app = create_app()

if __name__ == "__main__":
    # PORT from environment (for hosted deployments) or 5000 for local dev
    port = int(os.getenv("PORT", 5000))
    app.run(host="0.0.0.0", port=port, debug=os.getenv("FLASK_ENV") != "production")
