"""
Vercel entry point for the rescue dispatch API.

Settings are read from the environment once per cold start; a missing
required variable fails the deployment instead of individual requests.
"""

import os
from app import create_app

# Vercel expects the WSGI application to be named 'app'
app = create_app()

if __name__ == "__main__":
    app.run(debug=False, host="0.0.0.0", port=int(os.environ.get("PORT", 5000)))
