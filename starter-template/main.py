"""
Print Bee Site
==============

Flask app serving the Print Bee proxy and portal.
"""

import os
from flask import Flask

# ===== App Setup =====

app = Flask(__name__)

# Load config
from config import Config, IS_PRODUCTION
app.config['SECRET_KEY'] = Config.SECRET_KEY
app.config['ADMIN_PASSWORD'] = Config.ADMIN_PASSWORD
app.config['GAS_URL'] = Config.GAS_URL
app.config['PRINTBEE_API_URL'] = Config.PRINTBEE_API_URL
app.config['LOG_DB'] = Config.LOG_DB
app.config['BRAND_NAME'] = Config.BRAND_NAME

# Session security
app.config['SESSION_COOKIE_SECURE'] = IS_PRODUCTION
app.config['SESSION_COOKIE_HTTPONLY'] = True
app.config['SESSION_COOKIE_SAMESITE'] = 'Lax'

# Ensure log directory exists
os.makedirs(Config.LOG_DIR, exist_ok=True)

# ===== Print Bee =====

from printbee import PrintBee
printbee = PrintBee(app, {'brand_name': Config.BRAND_NAME})


# ===== Run =====

if __name__ == '__main__':
    print("\n" + "=" * 60)
    print("Print Bee")
    print("=" * 60)
    print(f"Order form:      http://localhost:{Config.PORT}/")
    print(f"Admin login:     http://localhost:{Config.PORT}/admin")
    print(f"Render status:   http://localhost:{Config.PORT}/render-status")
    print("=" * 60 + "\n")

    # threaded: the portal calls the proxy routes on this same server
    app.run(debug=not IS_PRODUCTION, port=Config.PORT, host='0.0.0.0', threaded=True)
