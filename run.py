#!/usr/bin/env python3
"""
Catroweb - Pocket Code community backend

Single entry point for the application.
Run with: python run.py
"""

import os

from dotenv import load_dotenv
load_dotenv()

from app import create_app

app = create_app()

if __name__ == '__main__':
    host = os.getenv('CATROWEB_HOST', '0.0.0.0')
    port = int(os.getenv('CATROWEB_PORT', '8080'))
    app.run(host=host, port=port, debug=app.config.get('DEBUG', False))
