"""
WSGI entry point.

Serve with any WSGI server, e.g. ``gunicorn seva_mitra.wsgi:app``.
"""

import os
from .app import create_app

# Create the Flask application instance
app = create_app()

if __name__ == "__main__":
    app.run(debug=False, host="0.0.0.0", port=int(os.environ.get("PORT", 5000)))
