"""
linkpage server
===============

Run with:
    python app.py

First run:
    flask --app linkpage setup

Visit:
    http://localhost:3000             - Landing page
    http://localhost:3000/login.html  - Admin login
"""

from linkpage import create_app
from linkpage.core.config import Config

app = create_app()


if __name__ == '__main__':
    print(f"Server running on http://localhost:{Config.PORT}")
    app.run(host='0.0.0.0', port=Config.PORT, debug=not Config.IS_PRODUCTION)
